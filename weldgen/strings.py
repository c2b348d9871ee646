"""Case conversions for identifiers: PascalCase, camelCase and snake_case."""


def _is_separator(c: str) -> bool:
    return not c.isalnum()


def _trim_right(text: str) -> str:
    end = len(text)
    while end > 0 and _is_separator(text[end - 1]):
        end -= 1
    return text[:end]


def _ascii_upper(c: str) -> str:
    return c.upper() if c.isascii() else c


def _ascii_lower(c: str) -> str:
    return c.lower() if c.isascii() else c


def _neighbour_is_lower(text: str, index: int) -> bool:
    after = text[index + 1] if index + 1 < len(text) else "A"
    before = text[index - 1] if index >= 1 else "A"
    return after.islower() or before.islower()


def _snake_like(text: str, separator: str) -> str:
    out = []
    first_character = True
    for index, c in enumerate(_trim_right(text)):
        if _is_separator(c):
            if not first_character:
                first_character = True
                out.append(separator)
        elif not first_character and c.isupper() and _neighbour_is_lower(text, index):
            out.append(separator + c.lower())
        else:
            first_character = False
            out.append(c.lower())
    return "".join(out)


def _camel_like(text: str, new_word: bool) -> str:
    last_char = " "
    found_real_char = False
    out = []
    for c in _trim_right(text):
        if _is_separator(c) and found_real_char:
            new_word = True
        elif not found_real_char and _is_separator(c):
            continue
        elif c.isnumeric():
            found_real_char = True
            new_word = True
            out.append(c)
        elif new_word or (last_char.islower() and c.isupper()):
            found_real_char = True
            new_word = False
            out.append(_ascii_upper(c))
        else:
            found_real_char = True
            last_char = c
            out.append(_ascii_lower(c))
    return "".join(out)


def to_pascal_case(s: str) -> str:
    """Convert to UpperPascalCase."""
    return _camel_like(s, new_word=True)


def to_camel_case(s: str) -> str:
    """Convert to lowerCamelCase."""
    return _camel_like(s, new_word=False)


def to_snake_case(s: str) -> str:
    """Convert to snake_case."""
    return _snake_like(s, "_")