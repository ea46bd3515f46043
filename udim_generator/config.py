"""
Configuration management for the UDIM makefile generator.
Supports TOML and JSON configuration files with validation.
"""

import os
import json
from dataclasses import dataclass, asdict

# Handle tomllib import for different Python versions
try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Python < 3.11 with tomli package
    except ImportError:
        tomllib = None  # Fallback if no TOML support
from typing import Dict, List, Optional, Any, Union
from pathlib import Path


ENV_PREFIX = "UDIM_GENERATOR_"


@dataclass
class GeneratorConfig:
    """Main configuration class for makefile generation."""

    # Makefile layout
    variable_name: str = "MIPS"
    pad_width: int = 50
    command: str = "$(MAKEMIP)"
    tile: bool = True
    calibration: float = 1.0

    # Output naming
    udim_token: str = "1001"
    udim_placeholder: str = "UDIM"
    source_extension: str = ".tga"
    output_extension: str = ".mip"

    # Priorities
    default_priority: float = 0.1
    ambient_occlusion_priority: float = 0.9
    normal_priority: float = 0.7
    specular_priority: float = 0.1

    # Templates
    template_dir: Optional[str] = None

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "GeneratorConfig":
        """Load configuration from TOML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            return cls._from_toml(config_path)
        elif config_path.suffix.lower() == '.json':
            return cls._from_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

    @classmethod
    def _from_toml(cls, config_path: Path) -> "GeneratorConfig":
        """Load configuration from TOML file."""
        if tomllib is None:
            raise ImportError("TOML support not available. Install tomli package for Python < 3.11")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_json(cls, config_path: Path) -> "GeneratorConfig":
        """Load configuration from JSON file."""
        with open(config_path, 'r') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """Create configuration from dictionary."""
        config_data = {}

        # Handle makefile layout
        if 'makefile' in data:
            makefile = data['makefile']
            config_data['variable_name'] = makefile.get('variable_name', 'MIPS')
            config_data['pad_width'] = int(makefile.get('pad_width', 50))
            config_data['command'] = makefile.get('command', '$(MAKEMIP)')
            config_data['tile'] = bool(makefile.get('tile', True))
            config_data['calibration'] = float(makefile.get('calibration', 1.0))

        # Handle output naming
        if 'naming' in data:
            naming = data['naming']
            config_data['udim_token'] = naming.get('udim_token', '1001')
            config_data['udim_placeholder'] = naming.get('udim_placeholder', 'UDIM')
            config_data['source_extension'] = naming.get('source_extension', '.tga')
            config_data['output_extension'] = naming.get('output_extension', '.mip')

        # Handle priorities
        if 'priority' in data:
            priority = data['priority']
            config_data['default_priority'] = float(priority.get('default', 0.1))
            config_data['ambient_occlusion_priority'] = float(priority.get('ambient_occlusion', 0.9))
            config_data['normal_priority'] = float(priority.get('normal', 0.7))
            config_data['specular_priority'] = float(priority.get('specular', 0.1))

        # Handle templates
        if 'templates' in data:
            config_data['template_dir'] = data['templates'].get('template_dir')

        return cls(**config_data)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Create configuration from environment variables only."""
        config = cls()
        return cls._apply_env_overrides(config)

    @classmethod
    def _apply_env_overrides(cls, config: "GeneratorConfig") -> "GeneratorConfig":
        """Apply environment variable overrides to configuration."""

        # Makefile layout
        if os.getenv('UDIM_GENERATOR_VARIABLE_NAME'):
            config.variable_name = os.getenv('UDIM_GENERATOR_VARIABLE_NAME', 'MIPS')

        if os.getenv('UDIM_GENERATOR_PAD_WIDTH'):
            config.pad_width = int(os.getenv('UDIM_GENERATOR_PAD_WIDTH', '50'))

        if os.getenv('UDIM_GENERATOR_COMMAND'):
            config.command = os.getenv('UDIM_GENERATOR_COMMAND', '$(MAKEMIP)')

        if os.getenv('UDIM_GENERATOR_TILE'):
            config.tile = os.getenv('UDIM_GENERATOR_TILE', 'true').lower() == 'true'

        if os.getenv('UDIM_GENERATOR_CALIBRATION'):
            config.calibration = float(os.getenv('UDIM_GENERATOR_CALIBRATION', '1.0'))

        # Output naming
        if os.getenv('UDIM_GENERATOR_UDIM_TOKEN'):
            config.udim_token = os.getenv('UDIM_GENERATOR_UDIM_TOKEN', '1001')

        if os.getenv('UDIM_GENERATOR_UDIM_PLACEHOLDER'):
            config.udim_placeholder = os.getenv('UDIM_GENERATOR_UDIM_PLACEHOLDER', 'UDIM')

        if os.getenv('UDIM_GENERATOR_SOURCE_EXTENSION'):
            config.source_extension = os.getenv('UDIM_GENERATOR_SOURCE_EXTENSION', '.tga')

        if os.getenv('UDIM_GENERATOR_OUTPUT_EXTENSION'):
            config.output_extension = os.getenv('UDIM_GENERATOR_OUTPUT_EXTENSION', '.mip')

        # Priorities
        if os.getenv('UDIM_GENERATOR_DEFAULT_PRIORITY'):
            config.default_priority = float(os.getenv('UDIM_GENERATOR_DEFAULT_PRIORITY', '0.1'))

        if os.getenv('UDIM_GENERATOR_AO_PRIORITY'):
            config.ambient_occlusion_priority = float(os.getenv('UDIM_GENERATOR_AO_PRIORITY', '0.9'))

        if os.getenv('UDIM_GENERATOR_NORMAL_PRIORITY'):
            config.normal_priority = float(os.getenv('UDIM_GENERATOR_NORMAL_PRIORITY', '0.7'))

        if os.getenv('UDIM_GENERATOR_SPECULAR_PRIORITY'):
            config.specular_priority = float(os.getenv('UDIM_GENERATOR_SPECULAR_PRIORITY', '0.1'))

        # Templates
        if os.getenv('UDIM_GENERATOR_TEMPLATE_DIR'):
            config.template_dir = os.getenv('UDIM_GENERATOR_TEMPLATE_DIR')

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to the sectioned layout used by config files."""
        data = asdict(self)
        result: Dict[str, Any] = {
            'makefile': {
                'variable_name': data['variable_name'],
                'pad_width': data['pad_width'],
                'command': data['command'],
                'tile': data['tile'],
                'calibration': data['calibration'],
            },
            'naming': {
                'udim_token': data['udim_token'],
                'udim_placeholder': data['udim_placeholder'],
                'source_extension': data['source_extension'],
                'output_extension': data['output_extension'],
            },
            'priority': {
                'default': data['default_priority'],
                'ambient_occlusion': data['ambient_occlusion_priority'],
                'normal': data['normal_priority'],
                'specular': data['specular_priority'],
            },
        }
        # TOML has no null
        if data['template_dir']:
            result['templates'] = {'template_dir': data['template_dir']}
        return result

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        # Validate makefile layout
        if not self.variable_name.strip():
            errors.append("variable_name cannot be empty")

        if self.pad_width <= 0:
            errors.append("pad_width must be positive")

        if not self.command.strip():
            errors.append("command cannot be empty")

        # Validate naming
        if not self.udim_token:
            errors.append("udim_token cannot be empty")

        for name in ('source_extension', 'output_extension'):
            if not getattr(self, name).startswith('.'):
                errors.append(f"{name} must start with '.'")

        # Validate priorities
        for name in ('default_priority', 'ambient_occlusion_priority', 'normal_priority', 'specular_priority'):
            if not 0 <= getattr(self, name) <= 1:
                errors.append(f"{name} must be between 0 and 1")

        return errors
