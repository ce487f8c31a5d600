"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, rplotctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_SCRIPT_PATH = "/tmp/r-tmp-plot"
DEFAULT_INTERPRETER = "R"


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    script_path: str = DEFAULT_SCRIPT_PATH
    interpreter_path: str = DEFAULT_INTERPRETER
