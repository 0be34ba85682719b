#!/usr/bin/env python3
"""Validate garage YAML files against the schema."""
import json
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _duplicate_ids(items, label: str) -> list[str]:
    seen = set()
    errors = []
    for item in items or []:
        item_id = item.get("id")
        if item_id in seen:
            errors.append(f"Duplicate {label} id: {item_id}")
        seen.add(item_id)
    return errors


def check_ids(data: dict) -> list[str]:
    """Vehicle ids are unique in the file; record ids are unique per vehicle."""
    vehicles = data.get("vehicles") or []
    errors = _duplicate_ids(vehicles, "vehicle")
    for v in vehicles:
        for key, label in (("reminders", "reminder"), ("fuel", "fill-up"), ("expenses", "expense")):
            errors.extend(
                f"{e} (vehicle {v.get('id')})" for e in _duplicate_ids(v.get(key), label)
            )
    return errors


def validate_garage_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single garage YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            # Round-trip through JSON so YAML dates become ISO strings
            data = json.loads(json.dumps(yaml.safe_load(f), default=str))
        validate(instance=data, schema=schema)
        errors.extend(check_ids(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given garage files (default: garage.yaml in the project root)."""
    schema = load_schema()
    args = sys.argv[1:] if argv is None else argv
    files = [Path(a) for a in args] or [Path(__file__).parent / "garage.yaml"]

    all_valid = True
    for filepath in files:
        errors = validate_garage_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
