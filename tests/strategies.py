"""Shared hypothesis strategies for jsonblade property-based testing.

Provides reusable strategies at three levels:

- **Lexer**: Template fragments with valid delimiter patterns
- **Data**: JSON-shaped values and dotted paths into them
- **Filters**: Filter names drawn from the built-in groups

Individual test modules compose these into property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

# ---------------------------------------------------------------------------
# Lexer strategies
# ---------------------------------------------------------------------------

# Plain text that never contains a delimiter
plain_text = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs",),
        blacklist_characters="{}\x00",
    ),
    min_size=1,
    max_size=200,
)

identifier = st.from_regex(r"[a-z_][a-z0-9_]{0,12}", fullmatch=True)
variable_tag = identifier.map(lambda name: f"{{{{{name}}}}}")

_comment_body = st.from_regex(r"[a-zA-Z0-9_ ]{0,30}", fullmatch=True)
comment_tag = _comment_body.map(lambda body: f"{{{{!--{body}--}}}}")

template_fragment = st.lists(
    st.one_of(plain_text, variable_tag, comment_tag),
    min_size=1,
    max_size=5,
).map("".join)

arbitrary_template_source = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=0,
    max_size=300,
)

# ---------------------------------------------------------------------------
# Data strategies
# ---------------------------------------------------------------------------

json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**31), max_value=2**31),
    st.floats(allow_nan=False, allow_infinity=False, width=32),
    st.text(max_size=20),
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(identifier, children, max_size=4),
    ),
    max_leaves=12,
)

json_objects = st.dictionaries(identifier, json_values, max_size=6)

dotted_path = st.lists(identifier, min_size=1, max_size=4).map(".".join)

safe_integer = st.integers(min_value=-10_000, max_value=10_000)

# Text without characters that split expressions
expression_safe_text = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs", "Cc"),
        blacklist_characters="{}|,()\"'\\",
    ),
    max_size=40,
)

# ---------------------------------------------------------------------------
# Filter strategies
# ---------------------------------------------------------------------------

string_safe_filters = st.sampled_from(["upper", "lower", "capitalize", "trim", "slug"])

list_safe_filters = st.sampled_from(["length", "first", "last", "reverse", "unique", "sort"])

predicate_filters = st.sampled_from(
    ["isEmail", "isURL", "isUUID", "isNumber", "isInteger", "isPhoneNumber", "isEmpty", "bool"]
)
