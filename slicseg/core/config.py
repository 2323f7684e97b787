"""
Configuration management for SlicSeg segmentation runs.

Default parameters for the propagation engine live in one nested dictionary
that can be overridden from JSON or YAML files, so a segmentation run can be
reproduced from its configuration file.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)


class SlicSegConfig:
    """Configuration manager for SlicSeg parameters."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file
        """
        self.config = self._get_default_config()

        if config_path is not None:
            self.load_config(config_path)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration parameters."""
        return {
            'algorithm': {
                'lambda': 10.0,     # weight of the pairwise term in max-flow
                'sigma': 5.0,       # intensity-difference sensitivity in max-flow
                'inner_dis': 5,     # erosion radius for foreground seeds
                'outer_dis': 6,     # dilation radius for background seeds
                'orientation': 2    # numpy axis perpendicular to the slices
            },
            'propagation': {
                'roi_margin': 25,
                'min_prior_pixels': 10,
                'min_eroded_pixels': 100,
                'outside_threshold': 0.5,
                'outside_damping': 0.4,
                'inside_threshold': 0.8,
                'inside_boost': 0.2,
                'clean_radius': 2
            },
            'connectivity': {
                'threshold': 0.5,
                'close_radius': 3,
                'lower_std': 3.0,
                'upper_std': 2.0,
                'damping': 0.4
            },
            'seeds': {
                'brush_radius': 2,
                'refine_radius': 15,
                'border_step': 5,
                'border_offset': 5
            },
            'classifier': {
                'n_estimators': 20,
                'max_depth': 8,
                'min_samples_leaf': 20,
                'max_samples': 20000,
                'random_state': 0
            },
            'processing': {
                'parallel': {
                    'enabled': False
                },
                'logging': {
                    'level': 'INFO',
                    'log_file': None
                }
            }
        }

    def load_config(self, config_path: Union[str, Path]) -> None:
        """
        Load configuration from file.

        Args:
            config_path: Path to configuration file (JSON or YAML)
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        logger.info(f"Loading configuration from {config_path}")

        if config_path.suffix.lower() == '.json':
            with open(config_path, 'r') as f:
                loaded_config = json.load(f)
        elif config_path.suffix.lower() in ['.yml', '.yaml']:
            import yaml
            with open(config_path, 'r') as f:
                loaded_config = yaml.safe_load(f) or {}
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

        self._merge_config(self.config, loaded_config)
        self._validate_config()

    def save_config(self, config_path: Union[str, Path]) -> None:
        """
        Save current configuration to file.

        Args:
            config_path: Output path for configuration file
        """
        config_path = Path(config_path)
        if ".." in config_path.parts:
            raise ValueError("Path traversal sequences ('..') are not allowed in config paths")

        config_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Saving configuration to {config_path}")

        if config_path.suffix.lower() == '.json':
            with open(config_path, 'w') as f:
                json.dump(self.config, f, indent=2)
        elif config_path.suffix.lower() in ['.yml', '.yaml']:
            import yaml
            with open(config_path, 'w') as f:
                yaml.dump(self.config, f, default_flow_style=False, indent=2)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

    def _merge_config(self, base_config: Dict[str, Any], new_config: Dict[str, Any]) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in new_config.items():
            if key in base_config and isinstance(base_config[key], dict) and isinstance(value, dict):
                self._merge_config(base_config[key], value)
            else:
                base_config[key] = value

    def _validate_config(self) -> None:
        """Validate configuration parameters."""
        algorithm = self.config['algorithm']
        if algorithm['lambda'] <= 0:
            raise ValueError(f"lambda must be > 0, got {algorithm['lambda']}")
        if algorithm['sigma'] <= 0:
            raise ValueError(f"sigma must be > 0, got {algorithm['sigma']}")
        for key in ('inner_dis', 'outer_dis'):
            if int(algorithm[key]) != algorithm[key] or algorithm[key] < 0:
                raise ValueError(f"{key} must be a non-negative integer, got {algorithm[key]}")
        if algorithm['orientation'] not in (0, 1, 2):
            raise ValueError(f"orientation must be 0, 1 or 2, got {algorithm['orientation']}")

        propagation = self.config['propagation']
        if propagation['roi_margin'] < 0:
            raise ValueError("roi_margin must be >= 0")
        for key in ('outside_damping', 'inside_boost', 'outside_threshold', 'inside_threshold'):
            if not 0 <= propagation[key] <= 1:
                raise ValueError(f"propagation.{key} must be between 0 and 1")

        connectivity = self.config['connectivity']
        if not 0 <= connectivity['damping'] <= 1:
            raise ValueError("connectivity.damping must be between 0 and 1")

        classifier = self.config['classifier']
        if classifier['n_estimators'] < 1:
            raise ValueError("classifier.n_estimators must be >= 1")
        if classifier['max_samples'] < 1:
            raise ValueError("classifier.max_samples must be >= 1")

        logger.info("Configuration validation passed")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to configuration value
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to configuration value
            value: Value to set
        """
        keys = key_path.split('.')
        config = self.config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Return a copy of one top-level section ('algorithm', 'classifier', ...)."""
        try:
            return dict(self.config[section])
        except KeyError:
            logger.warning(f"No configuration found for {section}")
            return {}


def setup_logging(config: Optional[SlicSegConfig] = None) -> None:
    """Configure the root logger from the processing.logging section."""
    config = config if config is not None else SlicSegConfig()
    level = config.get('processing.logging.level', 'INFO')
    log_file = config.get('processing.logging.log_file')

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def create_default_config_file(output_path: Union[str, Path] = "slicseg_config.json") -> None:
    """
    Create a default configuration file.

    Args:
        output_path: Path for the output configuration file
    """
    config = SlicSegConfig()
    config.save_config(output_path)
    logger.info(f"Default configuration saved to {output_path}")


def load_config_from_dict(config_dict: Dict[str, Any]) -> SlicSegConfig:
    """
    Create configuration from dictionary.

    Args:
        config_dict: Configuration dictionary

    Returns:
        SlicSegConfig object
    """
    config = SlicSegConfig()
    config._merge_config(config.config, config_dict)
    config._validate_config()
    return config
