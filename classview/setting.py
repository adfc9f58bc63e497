"""classview settings.

Loaded once from defaults, then config/classview.yaml, then environment
variables (a `.env` file is honoured via python-dotenv).
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .core.constants import JAVA_SOURCE_EXTENSION, MAX_CHAIN_DEPTH

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "classview.yaml"


class DisassemblerSettings(BaseModel):
    """javap invocation options."""
    command: str = Field("javap", description="javap executable")
    classpath: Optional[str] = Field(None, description="Extra classpath for compiled classes")
    include_code: bool = Field(False, description="Pass -c (bytecode is skipped when parsed)")
    include_private: bool = Field(False, description="Pass -p to list private members")
    timeout: float = Field(30.0, description="Seconds per javap call")


class PlantUMLSettings(BaseModel):
    """SVG rendering options."""
    jar_path: Optional[str] = Field(None, description="Local PlantUML JAR")
    server_url: str = Field("https://www.plantuml.com/plantuml", description="HTTP fallback server")
    render_svg: bool = Field(True, description="Render SVG next to the .puml file")
    timeout: float = Field(60.0, description="Seconds per render")


class ClassViewSettings(BaseModel):
    output_dir: str = Field("out_classdiagram", description="Where diagrams are written")
    max_depth: int = Field(MAX_CHAIN_DEPTH, ge=1, description="Max descriptors in an ancestor chain")
    source_extension: str = Field(JAVA_SOURCE_EXTENSION, description="Sibling source extension")
    log_level: str = Field("INFO", description="Root log level")
    disassembler: DisassemblerSettings = Field(default_factory=DisassemblerSettings)
    plantuml: PlantUMLSettings = Field(default_factory=PlantUMLSettings)


# (env var, section, key); section None means top level
_ENV_OVERRIDES = (
    ("CLASSVIEW_OUTPUT_DIR", None, "output_dir"),
    ("CLASSVIEW_MAX_DEPTH", None, "max_depth"),
    ("CLASSVIEW_LOG_LEVEL", None, "log_level"),
    ("CLASSVIEW_JAVAP", "disassembler", "command"),
    ("CLASSVIEW_CLASSPATH", "disassembler", "classpath"),
    ("PLANTUML_JAR_PATH", "plantuml", "jar_path"),
    ("PLANTUML_SERVER_URL", "plantuml", "server_url"),
)


def _load_yaml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        logger.warning(f"{config_path.name} not found at {config_path}, using defaults")
        return {}
    try:
        with open(config_path, "r") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading {config_path}: {e}")
        return {}


def load_settings(config_path: Optional[str] = None) -> ClassViewSettings:
    """Build settings from YAML and environment without caching."""
    load_dotenv()

    path = Path(config_path or os.getenv("CLASSVIEW_CONFIG") or _DEFAULT_CONFIG_PATH)
    data = _load_yaml(path)

    for env_name, section, key in _ENV_OVERRIDES:
        value = os.getenv(env_name)
        if value is None:
            continue
        target = data.setdefault(section, {}) if section else data
        target[key] = value

    return ClassViewSettings(**data)


@lru_cache(maxsize=1)
def get_settings(config_path: Optional[str] = None) -> ClassViewSettings:
    """Cached settings for the running process."""
    return load_settings(config_path)
