# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Resource addressing model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

__all__ = ["ResourceReference"]


@dataclass(frozen=True)
class ResourceReference:
    """
    Fully qualified address of one Resource Manager object.

    A reference identifies a resource either by its ``resource_id`` (the
    vendor-assigned path, globally unique and immutable once assigned) or, for
    resources that do not exist yet, by ``subscription_id`` + ``resource_type`` +
    ``name`` (and optionally ``resource_group``).

    :param resource_type: Resource type, e.g. ``"Microsoft.Compute/disks"``.
    :type resource_type: str
    :param resource_id: Full resource path starting with ``/subscriptions/``.
    :type resource_id: str
    :param subscription_id: Subscription the resource lives in.
    :type subscription_id: str
    :param resource_group: Resource group name.
    :type resource_group: str or None
    :param name: Resource name (last path segment).
    :type name: str

    Example::

        ref = ResourceReference.from_id(
            "/subscriptions/0000/resourceGroups/rg1/providers/Microsoft.Compute/disks/d1"
        )
        ref.resource_type   # "Microsoft.Compute/disks"
        ref.resource_group  # "rg1"
        ref.name            # "d1"
    """

    resource_type: str = ""
    resource_id: str = ""
    subscription_id: str = ""
    resource_group: Optional[str] = None
    name: str = ""

    @classmethod
    def from_id(cls, resource_id: str) -> "ResourceReference":
        """
        Parse a resource id into its parts.

        Unrecognized layouts keep ``resource_id`` and leave the other parts empty.
        Nested resources (``.../providers/NS/type/name/child/childName``) yield
        ``NS/type/child`` as resource type.
        """
        segments = [s for s in (resource_id or "").split("?")[0].split("/") if s]
        subscription_id = ""
        resource_group: Optional[str] = None
        resource_type = ""
        name = ""
        lowered = [s.lower() for s in segments]
        if "subscriptions" in lowered:
            i = lowered.index("subscriptions")
            if i + 1 < len(segments):
                subscription_id = segments[i + 1]
        if "resourcegroups" in lowered:
            i = lowered.index("resourcegroups")
            if i + 1 < len(segments):
                resource_group = segments[i + 1]
        if "providers" in lowered:
            i = len(lowered) - 1 - lowered[::-1].index("providers")
            rest = segments[i + 1 :]
            if rest:
                type_parts = [rest[0]]
                type_parts.extend(rest[1::2])
                resource_type = "/".join(type_parts)
                if len(rest) >= 3 and len(rest) % 2 == 1:
                    name = rest[-1]
        return cls(
            resource_type=resource_type,
            resource_id=resource_id or "",
            subscription_id=subscription_id,
            resource_group=resource_group,
            name=name,
        )

    @classmethod
    def from_body(
        cls,
        body: Mapping[str, Any],
        *,
        subscription_id: str = "",
        resource_group: Optional[str] = None,
    ) -> "ResourceReference":
        """Build a reference from a resource payload carrying ``id``, ``type`` and ``name``."""
        resource_id = body.get("id") or ""
        if resource_id:
            parsed = cls.from_id(resource_id)
            return cls(
                resource_type=body.get("type") or parsed.resource_type,
                resource_id=resource_id,
                subscription_id=parsed.subscription_id or subscription_id,
                resource_group=parsed.resource_group or resource_group,
                name=body.get("name") or parsed.name,
            )
        return cls(
            resource_type=body.get("type") or "",
            subscription_id=subscription_id,
            resource_group=resource_group,
            name=body.get("name") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
            "subscription_id": self.subscription_id,
            "resource_group": self.resource_group,
            "name": self.name,
        }
