"""Shared argument checks for the command parsers.

Every failure is an InvalidFormat naming the offending field, so feedback can
say exactly what to fix.
"""

from salesbook.errors import InvalidFormat, ValidationError
from salesbook.model.values import Index, Tag


def parse_value(field, cls, text, usage=None):
    """Build value object cls from text, reporting failures against field."""
    try:
        return cls(text)
    except ValidationError as e:
        raise InvalidFormat(field, f"Invalid {field}: {e}", usage) from None


def parse_index(text, usage=None, field="index"):
    text = (text or "").strip()
    if not text:
        raise InvalidFormat(field, f"Missing {field}", usage)
    return parse_value(field, Index, text, usage)


def parse_tags(values, usage=None):
    return frozenset(parse_value("tag", Tag, v, usage) for v in values)


def require_empty_preamble(args, usage=None):
    if args.preamble:
        raise InvalidFormat(
            "preamble", f"Unexpected text before the first prefix: {args.preamble!r}", usage)


def require_prefixes(args, required, usage=None):
    """Check every compulsory prefix is present.

    `required` maps prefix -> field name, e.g. {"d/": "date"}.
    """
    for prefix, field in required.items():
        if not args.has(prefix):
            raise InvalidFormat(field, f"Missing compulsory field: {field} ({prefix})", usage)


def single(args, prefix, field, usage=None):
    """The one value for prefix, or None. Repeating a single-valued prefix fails."""
    values = args.get_all(prefix)
    if len(values) > 1:
        raise InvalidFormat(field, f"Only one {field} ({prefix}) may be given", usage)
    return values[0] if values else None


def parse_keywords(text, usage=None, field="keyword"):
    keywords = (text or "").split()
    if not keywords:
        raise InvalidFormat(field, f"Missing {field}", usage)
    return tuple(keywords)


def require_no_args(text, word, usage=None):
    if text.strip():
        raise InvalidFormat("arguments", f"'{word}' takes no arguments", usage)


def contains_word(text, keywords):
    """True if any keyword equals a whole word of text (case-insensitive)."""
    words = {w.lower() for w in text.split()}
    return any(k.lower() in words for k in keywords)


def parse_sort_order(text, keys, usage=None):
    """Parse "ATTRIBUTE [asc|desc]" into (attribute, reverse)."""
    words = text.lower().split()
    if not words or len(words) > 2:
        raise InvalidFormat("attribute", "Give one attribute to sort by", usage)
    attribute = words[0]
    if attribute not in keys:
        raise InvalidFormat("attribute", f"Cannot sort by {attribute!r}", usage)
    reverse = False
    if len(words) == 2:
        if words[1] not in ("asc", "desc"):
            raise InvalidFormat("order", f"Sort order must be asc or desc, not {words[1]!r}", usage)
        reverse = words[1] == "desc"
    return attribute, reverse
