"""Template rendering: evaluation core, drivers and the Template object."""

from jsonblade.template.core import (
    Template,
    clear_template_cache,
    parse_json_output,
    parse_template,
    template_cache_info,
)
from jsonblade.template.effects import PENDING, Call, Gather, run_async, run_sync
from jsonblade.template.evaluator import eval_pipeline, render_template
from jsonblade.template.helpers import (
    Interpolation,
    assemble,
    get_object_path,
    is_truthy,
)
from jsonblade.template.loop_context import LoopContext

__all__ = [
    "PENDING",
    "Call",
    "Gather",
    "Interpolation",
    "LoopContext",
    "Template",
    "assemble",
    "clear_template_cache",
    "eval_pipeline",
    "get_object_path",
    "is_truthy",
    "parse_json_output",
    "parse_template",
    "render_template",
    "run_async",
    "run_sync",
    "template_cache_info",
]
