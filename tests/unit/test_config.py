"""Test configuration models, loading and saving."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from diffit.core.domain.config import (
    BackgroundConfig,
    DiffitConfig,
    FitConfig,
    OutputConfig,
    PeakConfig,
)
from diffit.core.domain.setup import FitSetup
from diffit.core.lineshapes import Gaussian, Raw
from diffit.core.shared.exceptions import ConfigError
from diffit.io.config import generate_default_config, load_config, save_config


@pytest.fixture
def sample_config_file(tmp_path):
    config_file = tmp_path / "diffit.toml"
    config_file.write_text(
        """
[fitting]
max_iterations = 50

[background]
degree = 2
ranges = [[10.0, 20.0], [60.0, 70.0]]

[[peaks]]
type = "Gaussian"
range = [35.0, 45.0]
guessed_peak = [40.0, 1000.0]
guessed_fwhm = 1.5

[[peaks]]
range = [50.0, 55.0]

[output]
directory = "Results"
formats = ["csv"]
"""
    )
    return config_file


class TestConfigModels:
    """Tests for validation of the configuration models."""

    def test_defaults(self):
        config = DiffitConfig()
        assert config.fitting.max_iterations == 300
        assert config.background.degree == 1
        assert config.background.ranges == []
        assert config.peaks == []
        assert config.output.directory == Path("Fits")
        assert config.output.separator == "\t"

    def test_degree_bounds(self):
        with pytest.raises(ValidationError):
            BackgroundConfig(degree=11)
        with pytest.raises(ValidationError):
            BackgroundConfig(degree=-1)

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError, match="exceeds maximum"):
            BackgroundConfig(ranges=[(20.0, 10.0)])
        with pytest.raises(ValidationError):
            PeakConfig(range=(5.0, 1.0))

    def test_unknown_peak_type(self):
        with pytest.raises(ValidationError):
            PeakConfig(type="Voigt", range=(0.0, 1.0))

    def test_default_peak_type_is_raw(self):
        assert PeakConfig(range=(0.0, 1.0)).type == "Raw"

    def test_fwhm_positive(self):
        with pytest.raises(ValidationError):
            PeakConfig(range=(0.0, 1.0), guessed_fwhm=0.0)

    def test_lambda_factor_above_one(self):
        with pytest.raises(ValidationError):
            FitConfig(lambda_factor=1.0)

    def test_duplicate_formats(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            DiffitConfig(output=OutputConfig(formats=["txt", "txt"]))

    def test_extra_keys_forbidden(self):
        with pytest.raises(ValidationError):
            DiffitConfig.model_validate({"fitting": {"lineshape": "gaussian"}})


class TestConfigLoading:
    """Tests for configuration file loading."""

    def test_load_valid_config(self, sample_config_file):
        config = load_config(sample_config_file)
        assert config.fitting.max_iterations == 50
        assert config.background.degree == 2
        assert config.background.ranges == [(10.0, 20.0), (60.0, 70.0)]
        assert config.peaks[0].type == "Gaussian"
        assert config.peaks[0].guessed_peak == (40.0, 1000.0)
        assert config.peaks[1].type == "Raw"
        assert config.output.directory == Path("Results")
        assert config.output.formats == ["csv"]

    def test_load_nonexistent_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "does_not_exist.toml")

    def test_load_invalid_toml(self, tmp_path):
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("not valid toml {{{")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(invalid_file)

    def test_load_invalid_values(self, tmp_path):
        bad_file = tmp_path / "bad.toml"
        bad_file.write_text("[background]\ndegree = 42\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(bad_file)

    def test_load_minimal_config(self, tmp_path):
        minimal_file = tmp_path / "minimal.toml"
        minimal_file.write_text("")
        assert load_config(minimal_file) == DiffitConfig()


class TestConfigSaving:
    """Tests for configuration file saving."""

    def test_save_and_reload(self, sample_config_file, tmp_path):
        config = load_config(sample_config_file)
        output = tmp_path / "saved.toml"
        save_config(config, output)
        assert load_config(output) == config

    def test_default_config_parses(self):
        data = tomllib.loads(generate_default_config())
        config = DiffitConfig.model_validate(data)
        assert config == DiffitConfig()


class TestSetupFromConfig:
    """Tests for building a fit setup from configuration."""

    def test_from_config(self, sample_config_file):
        setup = FitSetup.from_config(load_config(sample_config_file))
        assert setup.bg_degree == 2
        assert setup.bg_ranges.count() == 2
        assert len(setup.peaks) == 2

        gaussian = setup.peaks[0].prototype
        assert isinstance(gaussian, Gaussian)
        assert gaussian.range.min == 35.0
        assert gaussian.guessed_peak.x == 40.0
        assert gaussian.guessed_fwhm == 1.5
        assert gaussian.fitted_fwhm() == pytest.approx(1.5)

        assert isinstance(setup.peaks[1].prototype, Raw)
        assert setup.peaks[1].type_tag == "Raw"
