"""Config parser logic."""

from typing import Dict, Union, Any
import logging
import yaml

# Get module logger
logger = logging.getLogger(__name__)

CONFIG_FILE = '.prbranch.yaml'

ConfigValue = Union[str, bool]
SectionConfig = Dict[str, Any]  # Use Any since yaml can return various types
Config = Dict[str, SectionConfig]

def parse_config(path: str = CONFIG_FILE) -> Config:
    """Parse config from the repository config file, falling back to defaults."""
    config: Config = {
        'repo': {
            'remote': 'origin',
            'target_branch': 'main',
        },
        'user': {},
        'tool': {
            'branch_prefix': 'PR_BRANCH',
        }
    }

    try:
        with open(path, 'r') as f:
            logger.debug(f"Found {path}, loading...")
            file_config = yaml.safe_load(f)
            logger.debug(f"Config from {path}: {file_config}")
    except FileNotFoundError:
        logger.debug(f"No {path} found, using defaults")
        return config

    if isinstance(file_config, dict):
        for section in ('repo', 'user', 'tool'):
            if section in file_config and isinstance(file_config[section], dict):
                config[section].update(file_config[section])

    return config
