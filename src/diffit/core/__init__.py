"""Core numerics of diffit: domain types, fitting and peak shapes."""
