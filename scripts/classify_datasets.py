# scripts/classify_datasets.py
import sys
from pathlib import Path

# Add project root to Python path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))
"""
Classify dataset files (or every .csv / .json under a directory) from the
command line and optionally write the results to a JSON report.

Exit code 0 when every file is a cybersecurity dataset, 2 otherwise.
"""

import argparse
import logging

from pipeline.dataset_classifier import classify_path
from preprocessor.helpers import load_settings, save_json

DATASET_SUFFIXES = {".csv", ".json"}


def iter_dataset_files(paths):
    for p in map(Path, paths):
        if p.is_dir():
            for f in sorted(p.rglob("*")):
                if f.is_file() and f.suffix.lower() in DATASET_SUFFIXES:
                    yield f
        else:
            yield p


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Check whether datasets look like network-intrusion / cybersecurity data."
    )
    p.add_argument("paths", nargs="+", help="Dataset files or directories.")
    p.add_argument("--config", type=str, help="Alternative YAML settings file.")
    p.add_argument("--out", type=str, help="Write a JSON report here.")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(args.config)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(message)s")

    report = []
    rejected = 0

    for f in iter_dataset_files(args.paths):
        result = classify_path(f, **settings.classifier_options())
        verdict = "CYBER" if result.is_cybersecurity_related else "REJECTED"
        if not result.is_cybersecurity_related:
            rejected += 1
        print(f"{verdict:<9} {result.confidence:.3f}  {f}")
        report.append({"path": str(f), **result.to_dict()})

    if args.out:
        save_json(report, args.out)
        print("Report saved →", args.out)

    return 2 if rejected else 0


if __name__ == "__main__":
    raise SystemExit(main())
