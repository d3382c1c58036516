"""Field-level comparison of asset snapshots."""

from typing import Optional

from assetsync.domain.entities import Asset

# Fields populated from the local observation. Server-owned fields (id,
# last_checkout, assigned_to) are never compared.
COMPARED_FIELDS = ("asset_tag", "serial", "name", "warranty_months")
COMPARED_REFERENCES = ("location", "company", "model", "status_label")


def _reference_id(reference) -> Optional[int]:
    return None if reference is None else reference.id


def asset_differences(local: Asset, remote: Asset) -> list[str]:
    """Return the names of the compared fields that differ.

    References are compared by id only; a missing reference only equals
    another missing reference.
    """
    differences = [
        name for name in COMPARED_FIELDS if getattr(local, name) != getattr(remote, name)
    ]
    for name in COMPARED_REFERENCES:
        local_ref = getattr(local, name)
        remote_ref = getattr(remote, name)
        if (local_ref is None) != (remote_ref is None):
            differences.append(name)
        elif _reference_id(local_ref) != _reference_id(remote_ref):
            differences.append(name)
    return differences


def is_equivalent(local: Asset, remote: Asset) -> bool:
    """Check whether two assets agree on every field the agent populates."""
    return not asset_differences(local, remote)
