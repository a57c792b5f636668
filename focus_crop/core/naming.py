"""
Output file naming.

Derivatives are written next to each other as
'<directory>/<prefix><basename><suffix><extension>', where prefix and suffix
are templates that may contain a literal '[size]' placeholder.
"""
from pathlib import Path
from typing import Union

SIZE_PLACEHOLDER = '[size]'


def render_template(template: str, size_token: str) -> str:
    """
    Substitute the size token into a prefix/suffix template.

    Examples:
        >>> render_template('-[size]-focused', '400x300')
        '-400x300-focused'
        >>> render_template('thumb_', '400x300')
        'thumb_'
    """
    return template.replace(SIZE_PLACEHOLDER, size_token)


def output_path_for(
    source_path: Union[str, Path],
    directory: Union[str, Path],
    prefix: str,
    suffix: str,
    size_token: str
) -> Path:
    """
    Build the output path for one size.

    The source extension is kept, since derivatives are encoded in the
    source's format.

    Examples:
        >>> str(output_path_for('/img/cat.jpg', '/out', '', '-[size]-focused', '400x300'))
        '/out/cat-400x300-focused.jpg'
    """
    source = Path(source_path)
    basename = render_template(prefix, size_token) + source.stem + render_template(suffix, size_token)
    return Path(directory) / f"{basename}{source.suffix}"
