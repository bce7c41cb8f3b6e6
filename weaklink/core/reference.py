"""
Non-owning back-reference from a Child to its owning Parent.

Architecture:
- Wraps a weakref.ref so the back-edge never keeps the Parent alive
- Starts in an explicit unbound state, distinct from any valid target
- Is claimed by exactly one Parent when that Parent takes ownership
- Binds exactly once, to its claimant, at the single link point

Resolving an unbound or released reference raises DanglingReferenceError
rather than returning None.
"""

from typing import TYPE_CHECKING, Optional
from weakref import ReferenceType, ref

from weaklink.core.errors import DanglingReferenceError

if TYPE_CHECKING:
    from weaklink.core.child import Child
    from weaklink.core.parent import Parent


class BackReference:
    """Weak handle from a Child to the Parent that owns it.

    Created by the Child that holds it; there is one per Child.

    Class Invariants:
    1. Never holds a strong reference to its target or its holder
    2. Claimed by at most one owner, ever
    3. Once bound, only ever points at its claimant
    4. resolve() either returns the live target or raises
    """

    def __init__(self, holder: "Child") -> None:
        self._child_id = holder.id
        self._claimant: Optional[ReferenceType["Parent"]] = None
        self._ref: Optional[ReferenceType["Parent"]] = None

    @property
    def child_id(self) -> int:
        """Get the id of the Child holding this reference."""
        return self._child_id

    @property
    def is_claimed(self) -> bool:
        """Check whether an owner has taken the holding Child."""
        return self._claimant is not None

    @property
    def is_bound(self) -> bool:
        """Check whether the reference has been bound to an owner."""
        return self._ref is not None

    @property
    def is_alive(self) -> bool:
        """Check whether the reference is bound and its owner still exists."""
        return self._ref is not None and self._ref() is not None

    def resolve(self) -> "Parent":
        """Get the owning Parent.

        Returns:
            The live Parent this reference is bound to

        Raises:
            DanglingReferenceError: If unbound or the owner has been released
        """
        if self._ref is None:
            raise DanglingReferenceError("Parent is missing: back-reference was never bound", self._child_id)
        parent = self._ref()
        if parent is None:
            raise DanglingReferenceError("Parent is missing: owner has been released", self._child_id)
        return parent

    def claim(self, owner: "Parent") -> None:
        """Record owner as the only Parent allowed to bind this reference.

        Args:
            owner: The Parent taking ownership of the holding Child

        Raises:
            ValueError: If owner is None or the reference is already claimed
        """
        if owner is None:
            raise ValueError("Owner must not be None")
        if self._claimant is not None:
            raise ValueError(f"Child {self._child_id} is already owned")
        self._claimant = ref(owner)

    def bind(self, owner: "Parent") -> None:
        """Point the reference at its owner.

        Only the claimant may bind. Binding to the current owner again is a
        no-op.

        Args:
            owner: The Parent that owns the child holding this reference

        Raises:
            ValueError: If owner is None, the reference is unclaimed, or
                        owner is not the claimant
        """
        if owner is None:
            raise ValueError("Owner must not be None")
        if self._claimant is None:
            raise ValueError(f"Child {self._child_id} has no owner to bind to")
        if self._claimant() is not owner:
            raise ValueError(f"Child {self._child_id} is owned by another parent")
        if self._ref is None:
            self._ref = ref(owner)

    def __repr__(self) -> str:
        if self._ref is None:
            return "BackReference(<unbound>)"
        parent = self._ref()
        if parent is None:
            return "BackReference(<released>)"
        return f"BackReference(parent_id={parent.id})"
