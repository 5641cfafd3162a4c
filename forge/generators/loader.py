"""
Loads generated module source into a fresh module object.
"""

import logging
import sys
import types

logger = logging.getLogger(__name__)


def load_generated_module(source: str, name: str, register: bool = False) -> types.ModuleType:
    """
    Execute generated source as a module.

    Args:
        source: Generated Python source
        name: Module name to give the result
        register: Also insert the module into ``sys.modules``

    Returns:
        The executed module
    """
    module = types.ModuleType(name)
    module.__file__ = f"<forge:{name}>"
    code = compile(source, module.__file__, "exec")
    if register:
        sys.modules[name] = module
    exec(code, module.__dict__)
    logger.debug(f"Loaded generated module {name}")
    return module
