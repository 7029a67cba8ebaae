from __future__ import annotations

import inspect

import lazywire
import lazywire.exceptions as lazywire_exceptions


def test_all_exports_resolve_to_public_symbols() -> None:
    for name in lazywire.__all__:
        assert hasattr(lazywire, name), name
        assert not name.startswith("_")


def test_every_exception_is_exported() -> None:
    exception_names = {
        name
        for name, value in inspect.getmembers(lazywire_exceptions, inspect.isclass)
        if issubclass(value, Exception) and value.__module__ == lazywire_exceptions.__name__
    }

    assert exception_names <= set(lazywire.__all__)


def test_public_classes_have_docstrings() -> None:
    undocumented = [
        name
        for name in lazywire.__all__
        if inspect.isclass(getattr(lazywire, name)) and not inspect.getdoc(getattr(lazywire, name))
    ]

    assert undocumented == []


def test_registration_methods_share_signature_shape() -> None:
    builder_type = lazywire.ServiceRegistryBuilder
    signatures = {
        str(inspect.signature(getattr(builder_type, method_name)))
        for method_name in ("add_singleton", "add_scoped", "add_transient")
    }

    assert len(signatures) == 1
