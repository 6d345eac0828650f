"""
Configuration management for detection-overlap.

Loads YAML configuration with defaults for every setting.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class MatchingConfig:
    """Configuration for candidate scoring."""
    # centroid distances are floored here so that no pair scores zero
    distance_floor: float = 0.5
    # scores are shifted by max_distance * score_margin, must stay > 1
    score_margin: float = 1.1


@dataclass
class SolverConfig:
    """Configuration for the linear solver backend."""
    backend: str = "milp"
    num_threads: int = 0  # 0 = backend default
    mip_rel_gap: float = 0.0
    presolve: bool = True


@dataclass
class InputConfig:
    """Configuration for loading label maps from disk."""
    relabel_gt: bool = False
    relabel_rec: bool = False


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class DetectionOverlapConfig:
    """Complete configuration."""
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    input: InputConfig = field(default_factory=InputConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("matching", "solver", "input", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values. Unknown keys are ignored.
    """
    config = DetectionOverlapConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass."""
    for section_name in SECTIONS:
        values = yaml_data.get(section_name)
        if not values:
            continue
        section = getattr(config, section_name)
        for key, value in values.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(DetectionOverlapConfig())

    # an unset trace file is not worth writing out
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
