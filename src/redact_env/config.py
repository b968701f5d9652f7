# Copyright 2025 Lars Marowsky-Brée <lars@marowsky-bree.eu>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading for extra sensitive paths and secret rules."""

import re
import sys
from pathlib import Path
from typing import Any

import yaml

from .matcher import RegexMatcher
from .models import Catalog, SecretRule
from .patterns import build_catalog, default_catalog

PROJECT_CONFIG_FILE = ".redact_env.yaml"
GLOBAL_CONFIG_DIR = Path.home() / ".claude"
GLOBAL_CONFIG_FILE = GLOBAL_CONFIG_DIR / ".redact_env.yaml"

DEFAULT_REPLACEMENT = "<REDACTED>"


def _parse_rule(data: dict[str, Any]) -> SecretRule:
    """Parse a rule dictionary into a SecretRule."""
    return SecretRule(
        id=data["id"],
        matcher=RegexMatcher(data["pattern"], ignore_case=data.get("ignore_case", False)),
        replacement=data.get("replacement", DEFAULT_REPLACEMENT),
        file_types=tuple(data.get("file_types") or ()),
        description=data.get("description", ""),
    )


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open() as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def load_config_file(path: Path) -> tuple[list[str], list[SecretRule]]:
    """Load extra path patterns and secret rules from a YAML file."""
    data = _load_yaml(path)
    raw_paths = data.get("sensitive_paths") or []
    raw_rules = data.get("secret_rules") or []
    if not isinstance(raw_paths, list) or not isinstance(raw_rules, list):
        raise TypeError(f"{path}: 'sensitive_paths' and 'secret_rules' must be lists")
    paths = [str(p) for p in raw_paths]
    for p in paths:
        re.compile(p)
    return paths, [_parse_rule(r) for r in raw_rules]


def get_config_path(global_: bool = False, project_dir: Path | None = None) -> Path:
    """Get the path to the config file."""
    if global_:
        return GLOBAL_CONFIG_FILE
    if project_dir is None:
        project_dir = Path.cwd()
    return project_dir / PROJECT_CONFIG_FILE


def load_catalog(project_dir: Path | None = None) -> Catalog:
    """Build the catalog from built-ins plus global and project config.

    Project rules override global rules with the same id. A broken config
    file is reported and the built-in catalog is used instead.
    """
    try:
        global_paths, global_rules = load_config_file(GLOBAL_CONFIG_FILE)
        project_paths, project_rules = load_config_file(get_config_path(project_dir=project_dir))
    except (OSError, yaml.YAMLError, re.error, KeyError, TypeError, AttributeError) as e:
        sys.stderr.write(f"[redact-env] Ignoring invalid config: {e}\n")
        return default_catalog()

    if not (global_paths or global_rules or project_paths or project_rules):
        return default_catalog()

    # Index by id, project overrides global
    rules_by_id: dict[str, SecretRule] = {}
    for rule in global_rules:
        rules_by_id[rule.id] = rule
    for rule in project_rules:
        rules_by_id[rule.id] = rule

    paths = list(dict.fromkeys([*global_paths, *project_paths]))
    return build_catalog(extra_paths=paths, extra_rules=rules_by_id.values())


def _validate_rule(rule: dict[str, Any], index: int, seen_ids: set[str]) -> list[str]:
    """Validate a single rule dict, return list of errors."""
    errors: list[str] = []
    prefix = f"Rule {index + 1}"

    if "id" not in rule:
        errors.append(f"{prefix}: missing required field 'id'")
    else:
        rule_id = rule["id"]
        prefix = f"Rule '{rule_id}'"
        if rule_id in seen_ids:
            errors.append(f"{prefix}: duplicate id")
        seen_ids.add(rule_id)

    if "pattern" not in rule:
        errors.append(f"{prefix}: missing required field 'pattern'")
    elif not isinstance(rule["pattern"], str):
        errors.append(f"{prefix}: pattern must be a string")
    else:
        try:
            re.compile(rule["pattern"])
        except re.error as e:
            errors.append(f"{prefix}: invalid regex pattern: {e}")

    if "replacement" in rule and not isinstance(rule["replacement"], str):
        errors.append(f"{prefix}: replacement must be a string")

    file_types = rule.get("file_types")
    if file_types is not None and (
        not isinstance(file_types, list) or not all(isinstance(ft, str) for ft in file_types)
    ):
        errors.append(f"{prefix}: file_types must be a list of strings")

    return errors


def _validate_paths(paths: Any) -> list[str]:
    if not isinstance(paths, list):
        return ["Invalid format: 'sensitive_paths' must be a list"]
    errors: list[str] = []
    for i, pattern in enumerate(paths):
        if not isinstance(pattern, str):
            errors.append(f"Path {i + 1}: must be a string")
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            errors.append(f"Path {i + 1} '{pattern}': invalid regex pattern: {e}")
    return errors


def validate_config_file(path: Path) -> list[str]:
    """Validate a config file, return list of error messages (empty if valid)."""
    if not path.exists():
        return []

    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML syntax error: {e}"]

    if data is None:
        return []

    if not isinstance(data, dict):
        return ["Invalid format: expected a mapping with 'sensitive_paths' or 'secret_rules'"]

    errors: list[str] = []
    if "sensitive_paths" in data:
        errors.extend(_validate_paths(data["sensitive_paths"]))

    if "secret_rules" in data:
        if not isinstance(data["secret_rules"], list):
            errors.append("Invalid format: 'secret_rules' must be a list")
        else:
            seen_ids: set[str] = set()
            for i, rule in enumerate(data["secret_rules"]):
                if not isinstance(rule, dict):
                    errors.append(f"Rule {i + 1}: must be a mapping")
                    continue
                errors.extend(_validate_rule(rule, i, seen_ids))

    return errors
