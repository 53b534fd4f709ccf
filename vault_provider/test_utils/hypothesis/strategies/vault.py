from typing import Any, Dict

from hypothesis import strategies as st

# Vault path segments: no slashes, never empty
path_segment = st.from_regex(r"[a-z0-9][a-z0-9._-]{0,30}", fullmatch=True)

# orjson rejects lone surrogates
json_chars = st.characters(blacklist_categories=("Cs",))
json_text = st.text(alphabet=json_chars)

json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False, allow_infinity=False),
    json_text,
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(alphabet=json_chars, max_size=10), children, max_size=4),
    ),
    max_leaves=10,
)


@st.composite
def tenancy_triples(draw) -> Dict[str, str]:
    """Generate namespace, organization and repository names."""
    return {
        "namespace_domain": draw(path_segment),
        "organization": draw(path_segment),
        "repository": draw(path_segment),
    }


@st.composite
def string_secret_payloads(draw) -> Dict[str, str]:
    """Generate secret payloads holding only string values."""
    return draw(st.dictionaries(st.text(alphabet=json_chars, min_size=1), json_text, max_size=10))


@st.composite
def secret_payloads(draw) -> Dict[str, Any]:
    """Generate secret payloads with arbitrary JSON values."""
    return draw(st.dictionaries(st.text(alphabet=json_chars, min_size=1), json_values, max_size=10))
