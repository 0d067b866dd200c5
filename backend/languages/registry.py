"""Language module registry."""
from core.errors import AppError, Ok, Result, not_found

from .base import LanguageModule

_MODULES: dict[str, LanguageModule] = {}


def register(module: LanguageModule) -> None:
    _MODULES[module.code] = module


def get_module(code: str) -> Result[LanguageModule, AppError]:
    """Look up a registered language module by ISO code."""
    module = _MODULES.get(code)
    if module is None:
        return not_found("Language", code, origin="languages.registry")
    return Ok(module)


def list_languages() -> list[dict]:
    return [{"code": m.code, "name": m.name, "nativeName": m.native_name} for m in _MODULES.values()]


def _auto_register() -> None:
    from .german import GermanModule
    register(GermanModule())


_auto_register()
