"""
Tests for configuration loading, presets and logging setup
"""

import logging

import pytest

from oculomotor.event_detection import DetectionConfig, GazeSmoother, GazeSample
from oculomotor.utils import load_config, setup_logger, setup_logger_from_config


class TestDetectionConfig:
    """Tests for DetectionConfig"""

    def test_clinical_preset(self):
        """Test clinical preset thresholds"""
        config = DetectionConfig.clinical()
        assert config.dispersion_threshold == 15.0
        assert config.min_fixation_duration_ms == 80
        assert config.prolonged_fixation_ms == 400
        assert config.window_size == 1000
        assert config.wrap_turn_angles is False
        assert config.clamp_indices is False

    def test_webcam_preset(self):
        """Test webcam preset is looser and smoothed"""
        config = DetectionConfig.webcam()
        assert config.dispersion_threshold == 30.0
        assert config.min_fixation_duration_ms == 100
        assert config.window_size == 500
        assert config.smoothing_window == 5
        assert config.clamp_indices is True

    def test_from_dict_overrides(self):
        """Test per-field overrides on top of a preset"""
        config = DetectionConfig.from_dict({
            'preset': 'Webcam',
            'dispersion_threshold': 25.0,
            'wrap_turn_angles': True,
        })
        assert config.dispersion_threshold == 25.0
        assert config.wrap_turn_angles is True
        assert config.min_fixation_duration_ms == 100

    def test_from_dict_empty(self):
        """Test an empty section gives the clinical preset"""
        assert DetectionConfig.from_dict(None) == DetectionConfig.clinical()
        assert DetectionConfig.from_dict({}) == DetectionConfig.clinical()

    def test_unknown_setting(self):
        """Test unknown keys are rejected"""
        with pytest.raises(ValueError, match="Unknown eye_tracking settings"):
            DetectionConfig.from_dict({'dispersion': 10})

    def test_unknown_preset(self):
        """Test unknown presets are rejected"""
        with pytest.raises(ValueError, match="Unknown preset"):
            DetectionConfig.preset('eyelink')

    @pytest.mark.parametrize("field, value", [
        ('dispersion_threshold', 0),
        ('min_fixation_duration_ms', -1),
        ('prolonged_fixation_ms', -5),
        ('window_size', 2),
        ('parallel_tolerance', -0.1),
        ('smoothing_window', 0),
        ('window_size', 1000.0),
        ('smoothing_window', 2.5),
        ('min_fixation_duration_ms', True),
        ('prolonged_fixation_ms', '400'),
        ('dispersion_threshold', '15'),
        ('dispersion_threshold', float('nan')),
        ('parallel_tolerance', None),
        ('wrap_turn_angles', 'yes'),
        ('clamp_indices', 1),
    ])
    def test_invalid_values(self, field, value):
        """Test nonsensical values fail at construction"""
        with pytest.raises(ValueError):
            DetectionConfig(**{field: value})

    def test_to_dict_round_trip(self):
        """Test to_dict feeds back into from_dict"""
        config = DetectionConfig.webcam()
        assert DetectionConfig.from_dict(config.to_dict()) == config

    def test_yaml_float_for_integer_setting(self, tmp_path):
        """Test a float written for an integer setting fails when the config is built"""
        path = tmp_path / "config.yaml"
        path.write_text("eye_tracking:\n  window_size: 1000.0\n")
        with pytest.raises(ValueError, match="window_size must be an integer"):
            DetectionConfig.from_dict(load_config(str(path))['eye_tracking'])


class TestGazeSmoother:
    """Tests for GazeSmoother"""

    def test_moving_average(self):
        """Test positions are averaged over the window"""
        smoother = GazeSmoother(window=3)
        xs = [smoother.smooth(GazeSample(x, 0, i)).x for i, x in enumerate([0, 3, 6, 9])]
        assert xs == [0.0, 1.5, 3.0, 6.0]

    def test_window_of_one_is_identity(self):
        """Test a window of one returns the sample unchanged"""
        s = GazeSample(4, 2, 0)
        assert GazeSmoother(window=1).smooth(s) is s

    def test_invalid_window(self):
        """Test non-positive windows are rejected"""
        with pytest.raises(ValueError):
            GazeSmoother(window=0)


class TestConfigLoader:
    """Tests for YAML configuration loading"""

    def test_load_config(self, tmp_path):
        """Test a YAML file loads into a dictionary"""
        path = tmp_path / "config.yaml"
        path.write_text(
            "logging:\n"
            "  level: DEBUG\n"
            "eye_tracking:\n"
            "  preset: webcam\n"
            "  window_size: 300\n"
        )
        config = load_config(str(path))
        assert config['logging']['level'] == 'DEBUG'
        assert DetectionConfig.from_dict(config['eye_tracking']).window_size == 300

    def test_empty_file(self, tmp_path):
        """Test an empty file loads as an empty dictionary"""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_shipped_config(self):
        """Test the repository's default config builds a clinical config"""
        from pathlib import Path
        path = Path(__file__).resolve().parent.parent / "config" / "config.yaml"
        config = load_config(str(path))
        assert DetectionConfig.from_dict(config['eye_tracking']) == DetectionConfig.clinical()


class TestLogger:
    """Tests for logger setup"""

    def test_console_only(self):
        """Test console-only logger configuration"""
        logger = setup_logger(name="oculomotor.test_console", log_level="DEBUG")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        """Test file logging writes to the requested directory"""
        logger = setup_logger(
            name="oculomotor.test_file",
            log_dir=str(tmp_path),
            log_file="session.log",
            console_output=False
        )
        logger.info("session started")
        for handler in logger.handlers:
            handler.flush()

        assert (tmp_path / "session.log").read_text(encoding='utf-8').count("session started") == 1

    def test_repeated_setup_replaces_handlers(self):
        """Test calling setup twice does not duplicate handlers"""
        setup_logger(name="oculomotor.test_repeat")
        logger = setup_logger(name="oculomotor.test_repeat")
        assert len(logger.handlers) == 1

    def test_setup_from_config_section(self, tmp_path):
        """Test the logging section's directory and file name are honoured"""
        logger = setup_logger_from_config(
            {'level': 'WARNING', 'log_directory': str(tmp_path / "logs"), 'log_file': "run.log"},
            name="oculomotor.test_section",
            console_output=False
        )
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert (tmp_path / "logs" / "run.log").exists()
