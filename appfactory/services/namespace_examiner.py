"""Namespace examiner for semantic-link enabled namespaces."""

from __future__ import annotations

from collections.abc import Mapping


class NamespaceExaminer:
    """Answers whether a namespace has semantic links enabled."""

    def __init__(self, namespaces: Mapping[int, bool]) -> None:
        self._namespaces = {int(ns): bool(enabled) for ns, enabled in namespaces.items()}

    @classmethod
    def new_from_mapping(cls, namespaces: Mapping[int, bool] | None) -> "NamespaceExaminer":
        return cls(namespaces or {})

    def is_semantic_enabled(self, namespace: int) -> bool:
        return self._namespaces.get(int(namespace), False)

    def enabled_namespaces(self) -> list[int]:
        return sorted(ns for ns, enabled in self._namespaces.items() if enabled)
