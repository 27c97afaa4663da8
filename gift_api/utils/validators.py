import re
from typing import Iterable


# Letters (any script), digits, plain spaces and ( ) [ ] + - & / _
_NAME_PATTERN = re.compile(r"^[\w ()\[\]+\-&/]*$", re.UNICODE)


def require_name(value: str, max_length: int, label: str = "name") -> str:
    value = (value or "").strip()

    if not value:
        raise ValueError(f"{label} must not be blank")

    if len(value) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")

    if not _NAME_PATTERN.match(value):
        raise ValueError(
            f"{label} may only contain letters, digits, spaces and ( ) [ ] + - & / _"
        )

    return value


def require_unique(values: Iterable[str], label: str) -> None:
    seen = set()
    duplicates = []
    for v in values:
        if v in seen and v not in duplicates:
            duplicates.append(v)
        seen.add(v)
    if duplicates:
        raise ValueError(f"Duplicate {label}: {', '.join(duplicates)}")
