# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Resource type to api-version lookup."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Tuple, Union

from ..common.constants import DEFAULT_API_VERSION


class VersionTable:
    """
    Immutable resource-type prefix to api-version table.

    Lookup is a case-insensitive substring match of each prefix against the input.
    When several prefixes match, the longest one wins; prefixes of equal length are
    ordered by their lowercased text and the last one wins. The table is never
    mutated after construction and is safe to share between threads.

    :param entries: Mapping or iterable of ``(prefix, version)`` pairs.
    :param default: Version returned when nothing matches.
    """

    __slots__ = ("_entries", "_default")

    def __init__(
        self,
        entries: Union[Mapping[str, str], Iterable[Tuple[str, str]]] = (),
        default: str = DEFAULT_API_VERSION,
    ) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        ordered = sorted(((p, v) for p, v in pairs if p), key=lambda e: (len(e[0]), e[0].lower()))
        self._entries: Tuple[Tuple[str, str, str], ...] = tuple((p, p.lower(), v) for p, v in ordered)
        self._default = default

    @property
    def default(self) -> str:
        return self._default

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, prefix: object) -> bool:
        return isinstance(prefix, str) and any(p == prefix for p, _, _ in self._entries)

    def get(self, prefix: str) -> Optional[str]:
        """Exact-prefix lookup; ``None`` when the prefix has no entry."""
        for p, _, v in self._entries:
            if p == prefix:
                return v
        return None

    def resolve(self, resource_type: str) -> str:
        """
        Return the api-version for a resource type or a full resource path.

        :param resource_type: Resource type (``"Microsoft.Compute/disks"``) or resource id.
        :type resource_type: str
        :return: Matching version, or the default version when nothing matches.
        :rtype: str
        """
        needle = (resource_type or "").lower()
        version = self._default
        # Entries are sorted by ascending length, so the last hit is the longest
        for _, lowered, v in self._entries:
            if lowered in needle:
                version = v
        return version

    def __repr__(self) -> str:
        return f"VersionTable(entries={len(self._entries)}, default={self._default!r})"
