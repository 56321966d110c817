from __future__ import annotations

import importlib
import importlib.util
import types
import warnings

# top-level package -> extra of fpmine that installs it
EXTRAS = {
    "tqdm": "progress",
}


def import_optional_dependency(name: str, errors: str = "raise") -> types.ModuleType | None:
    """Import *name*, which may live in one of fpmine's optional extras.

    Parameters
    ----------
    name : str
        Module to import, e.g. ``"tqdm.auto"``.
    errors : {'raise', 'warn', 'ignore'}
        What to do when it is not installed: raise an ``ImportError``, warn
        and return ``None``, or just return ``None``.
    """
    if errors not in ("raise", "warn", "ignore"):
        raise ValueError(f"Invalid value for errors: {errors}")

    package_name = name.split(".")[0]
    if importlib.util.find_spec(package_name) is not None:
        return importlib.import_module(name)

    extra = EXTRAS.get(package_name)
    hint = f"pip install fpmine[{extra}]" if extra else f"pip install {package_name}"
    msg = f"Missing optional dependency '{package_name}'. Install it with `{hint}`."
    if errors == "raise":
        raise ImportError(msg)
    if errors == "warn":
        warnings.warn(msg, UserWarning, stacklevel=2)
    return None
