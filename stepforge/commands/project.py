"""Locate a .stepforge/ project and load its config, patterns and analyses."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from stepforge.compiler.parser import parse_config_yaml
from stepforge.engine.patterns import DEFAULT_REGISTRY, PatternRegistry, load_registry
from stepforge.types import GeneratorConfig

STEPFORGE_DIR = ".stepforge"
ANALYSIS_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass
class Project:
    root: Path
    config: GeneratorConfig
    registry: PatternRegistry

    @property
    def stepforge_dir(self) -> Path:
        return self.root / STEPFORGE_DIR


def load_project(cwd: str | Path) -> Project:
    """Config and registry for cwd; defaults when no .stepforge/ exists."""
    root = Path(cwd)
    sf_dir = root / STEPFORGE_DIR
    if not sf_dir.is_dir():
        return Project(root=root, config=GeneratorConfig(), registry=DEFAULT_REGISTRY)

    config_path = sf_dir / "config.yaml"
    config = GeneratorConfig()
    if config_path.exists():
        config = parse_config_yaml(config_path.read_text(encoding="utf-8"))
    return Project(root=root, config=config, registry=load_registry(sf_dir))


def resolve_analysis(name: str, cwd: str | Path) -> Path | None:
    """A path relative to cwd, or a name under .stepforge/analyses/."""
    direct = Path(cwd) / name
    if direct.is_file():
        return direct
    analyses_dir = Path(cwd) / STEPFORGE_DIR / "analyses"
    for suffix in ("", *ANALYSIS_SUFFIXES):
        candidate = analyses_dir / f"{name}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def output_filename(feature_name: str) -> str:
    """``Project Management`` -> ``project-management-steps.js``."""
    slug = re.sub(r"[^a-z0-9]+", "-", feature_name.lower()).strip("-")
    return f"{slug or 'feature'}-steps.js"
