# preprocessor/helpers.py
"""
Small helper utilities: YAML settings and JSON export.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from pipeline.scoring import Calibration, get_calibration

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"
CONFIG_ENV_VAR = "DATASET_CLASSIFIER_CONFIG"


@dataclass(frozen=True)
class ClassifierSettings:
    calibration: str = "extended"
    max_sample_rows: int = 200
    max_json_depth: int = 50
    log_level: str = "INFO"
    max_upload_mb: int = 200

    @property
    def calibration_table(self) -> Calibration:
        return get_calibration(self.calibration)

    def classifier_options(self) -> dict:
        """Keyword arguments for pipeline.dataset_classifier.classify_*."""
        return {
            "calibration": self.calibration_table,
            "max_rows": self.max_sample_rows,
            "max_depth": self.max_json_depth,
        }


def load_config(path):
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_settings(path=None) -> ClassifierSettings:
    """
    Read settings from YAML. Lookup order: explicit path,
    $DATASET_CLASSIFIER_CONFIG, preprocessor/config.yaml.
    Missing keys keep their defaults.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

    cfg = load_config(path)
    defaults = ClassifierSettings()

    settings = ClassifierSettings(
        calibration=str(cfg.get("calibration", defaults.calibration)),
        max_sample_rows=int(cfg.get("max_sample_rows", defaults.max_sample_rows)),
        max_json_depth=int(cfg.get("max_json_depth", defaults.max_json_depth)),
        log_level=str(cfg.get("log_level", defaults.log_level)).upper(),
        max_upload_mb=int(cfg.get("max_upload_mb", defaults.max_upload_mb)),
    )

    # fail at load time rather than on the first upload
    get_calibration(settings.calibration)

    if settings.max_sample_rows < 1:
        raise ValueError("max_sample_rows must be >= 1")
    if settings.max_json_depth < 1:
        raise ValueError("max_json_depth must be >= 1")

    return settings


def save_json(obj, path):
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w") as f:
        json.dump(obj, f, indent=2)


def load_json(path):
    p = Path(path)
    with open(p, "r") as f:
        return json.load(f)
