"""Technique discovery.

Every public module in frame_colours/techniques/ that defines a module-level
`technique` (a Technique) becomes a CLI subcommand. The module docstring is
the technique's documentation: its first line is the subcommand help, the
whole of it is what `frame-colours help <name>` prints.
"""

import functools
import importlib
import pkgutil
from types import ModuleType

from frame_colours import techniques
from frame_colours.core.types import Technique


@functools.cache
def _modules() -> dict[str, tuple[Technique, ModuleType]]:
    found: dict[str, tuple[Technique, ModuleType]] = {}
    for info in pkgutil.iter_modules(techniques.__path__, prefix=f'{techniques.__name__}.'):
        if info.name.rpartition('.')[2].startswith('_'):
            continue
        module = importlib.import_module(info.name)
        tech = getattr(module, 'technique', None)
        if not isinstance(tech, Technique):
            continue
        if tech.name in found:
            raise RuntimeError(f'Technique {tech.name!r} defined twice ({found[tech.name][1].__name__}, {info.name})')
        found[tech.name] = (tech, module)
    return found


def all_techniques() -> dict[str, Technique]:
    """All techniques keyed by name, in name order."""
    return {name: tech for name, (tech, _module) in sorted(_modules().items())}


def get(name: str) -> Technique:
    reg = _modules()
    if name not in reg:
        raise KeyError(f'Unknown technique: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name][0]


def doc(name: str) -> str:
    """Full module docstring for a technique, '' if it has none."""
    get(name)
    return (_modules()[name][1].__doc__ or '').strip()


def summary(name: str) -> str:
    """First docstring line, falling back to the technique's help text."""
    text = doc(name)
    return text.splitlines()[0] if text else get(name).help
