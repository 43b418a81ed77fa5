from collections.abc import Callable
from typing import Any, TypeAlias


# Signature of a shortcode generator: (target, owner_id, salt, length) -> shortcode
ShortcodeGenerator: TypeAlias = Callable[..., str]

# Raw YAML configuration document
ConfigDocument: TypeAlias = dict[str, Any]
