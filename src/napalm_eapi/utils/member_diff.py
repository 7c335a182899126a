"""Port-channel membership change-set planner.

Compares the *current* members of a channel group (as reported by
``show port-channel <id> all-ports``) against a *desired* member list and
produces a :class:`MemberChangeSet` describing which interfaces to unbind and
which to bind.
"""

from __future__ import annotations

from napalm_eapi.model.interface import MemberChangeSet


def plan_member_changes(current: list[str], desired: list[str]) -> MemberChangeSet:
    """Compute the membership changes needed to reach *desired*.

    Interfaces present in both lists are left untouched.  Duplicates in
    either list are collapsed to their first occurrence.

    Args:
        current: Interfaces currently bound to the channel group.
        desired: Interfaces that should be bound after reconciliation.

    Returns:
        A :class:`MemberChangeSet` whose ``remove`` list follows the order of
        *current* and whose ``add`` list follows the order of *desired*.
    """
    current_set = set(current)
    desired_set = set(desired)

    remove = [intf for intf in _unique(current) if intf not in desired_set]
    add = [intf for intf in _unique(desired) if intf not in current_set]
    return MemberChangeSet(remove=remove, add=add)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _unique(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))
