"""JSONBlade — a templating engine for generating JSON.

Templates are JSON text with ``{{ }}`` expressions and block directives.
Rendering interpolates data, runs filter chains, and parses the result:

    >>> from jsonblade import compile_json_template
    >>> compile_json_template('{"name": "{{user.name | upper}}"}', {"user": {"name": "ada"}})
    {'name': 'ADA'}

Isolated compilers with their own filters and configuration:
    >>> from jsonblade import JSONBlade
    >>> blade = JSONBlade(use_builtins=True)
    >>> blade.compile('{"tags": {{tags | unique}}}', {"tags": ["a", "a", "b"]})
    {'tags': ['a', 'b']}

Template syntax:
    - ``{{path.to.value | filter(arg) | ...}}`` interpolation with filters
    - ``{{fn(arg, other.path)}}`` host function calls
    - ``{{#if cond}}...{{#else}}...{{/if}}`` and ``{{#unless cond}}...{{/unless}}``
    - ``{{#each items}}...{{/each}}`` with ``@index``, ``@first``, ``@last``,
      ``@length`` and ``this``
    - ``{{#set name = expr}}`` template variables
    - ``{{!-- comment --}}``

Architecture:
Template Source → Lexer → Parser → node tree → evaluator → text → json.loads

Pipeline stages:
1. **Lexer**: Tokenizes template source into a token stream
2. **Parser**: Builds an immutable node tree (cached per source)
3. **Evaluator**: One generator-based core driven synchronously or with asyncio
4. **Assembly**: Quote-aware formatting of interpolated values

Error policy:
    Unknown filters, failing filters and invalid output are reported through
    ``TemplateConfig``: logged as warnings by default, raised as
    ``TemplateException`` with ``throw_on_error``.

"""

from jsonblade._types import Token, TokenType
from jsonblade.analysis import (
    analyze_data_structure,
    get_properties_for_path,
    validate_path,
)
from jsonblade.blade import JSONBlade
from jsonblade.compiler import (
    compile_json_template,
    compile_json_template_async,
    evaluate_expression,
    evaluate_expression_async,
    render_json_template,
    render_json_template_async,
)
from jsonblade.environment import (
    AsyncFilterRegistry,
    Delimiters,
    ErrorType,
    FilterRegistry,
    SourceSnippet,
    TemplateConfig,
    TemplateError,
    TemplateException,
    async_filter_registry,
    build_source_snippet,
    create_template_error,
    filter_registry,
    get_async_filter,
    get_filter,
    get_template_config,
    has_async_filter,
    has_filter,
    register_async_filter,
    register_filter,
    register_filters,
    reset_template_config,
    set_template_config,
    unregister_async_filter,
    unregister_filter,
)
from jsonblade.filters import (
    ARRAY_FILTERS,
    DATE_FILTERS,
    LOGIC_FILTERS,
    NUMBER_FILTERS,
    OBJECT_FILTERS,
    STRING_FILTERS,
    VALIDATION_FILTERS,
    initialize_filters,
    register_array_filters,
    register_date_filters,
    register_logic_filters,
    register_number_filters,
    register_object_filters,
    register_string_filters,
    register_validation_filters,
    reset_filters,
)
from jsonblade.parser import ParseError
from jsonblade.render_context import RenderContext, TemplateFunction
from jsonblade.template import (
    PENDING,
    LoopContext,
    Template,
    clear_template_cache,
    get_object_path,
    is_truthy,
)

__version__ = "0.1.0"

__all__ = [
    "ARRAY_FILTERS",
    "DATE_FILTERS",
    "LOGIC_FILTERS",
    "NUMBER_FILTERS",
    "OBJECT_FILTERS",
    "PENDING",
    "STRING_FILTERS",
    "VALIDATION_FILTERS",
    "AsyncFilterRegistry",
    "Delimiters",
    "ErrorType",
    "FilterRegistry",
    "JSONBlade",
    "LoopContext",
    "ParseError",
    "RenderContext",
    "SourceSnippet",
    "Template",
    "TemplateConfig",
    "TemplateError",
    "TemplateException",
    "TemplateFunction",
    "Token",
    "TokenType",
    "__version__",
    "analyze_data_structure",
    "async_filter_registry",
    "build_source_snippet",
    "clear_template_cache",
    "compile_json_template",
    "compile_json_template_async",
    "create_template_error",
    "evaluate_expression",
    "evaluate_expression_async",
    "filter_registry",
    "get_async_filter",
    "get_filter",
    "get_object_path",
    "get_properties_for_path",
    "get_template_config",
    "has_async_filter",
    "has_filter",
    "initialize_filters",
    "is_truthy",
    "register_array_filters",
    "register_async_filter",
    "register_date_filters",
    "register_filter",
    "register_filters",
    "register_logic_filters",
    "register_number_filters",
    "register_object_filters",
    "register_string_filters",
    "register_validation_filters",
    "render_json_template",
    "render_json_template_async",
    "reset_filters",
    "reset_template_config",
    "set_template_config",
    "unregister_async_filter",
    "unregister_filter",
    "validate_path",
]
