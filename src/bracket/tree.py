"""
Explicit tree view over a stored match set.

Identifiers, parent links and the parent slot a match feeds are all derived
here, so the generator and the propagator agree on the topology.
"""
import math
from typing import Dict, List, Optional

from .errors import DataIntegrityError, ValidationError
from .models import Match, TEAM1, TEAM2


def match_identifier(round_index: int, match_index: int) -> str:
    """Deterministic key for a match, e.g. (0, 0) -> 'R1-M1'."""
    return f"R{round_index + 1}-M{match_index + 1}"


def next_match_identifier(round_index: int, match_index: int, round_count: int) -> Optional[str]:
    """Identifier of the parent match, or None for the final."""
    if round_index >= round_count - 1:
        return None
    return match_identifier(round_index + 1, match_index // 2)


def parent_slot(match_index: int) -> str:
    """Even matches feed the parent's team1 slot, odd matches feed team2."""
    return TEAM1 if match_index % 2 == 0 else TEAM2


def calculate_round_count(slot_count: int) -> int:
    """Number of rounds for a power-of-two slot grid."""
    if not isinstance(slot_count, int) or slot_count < 2 or slot_count & (slot_count - 1):
        raise ValidationError(f"Slot count must be a power of two of at least 2, got {slot_count!r}")
    return int(math.log2(slot_count))


class BracketNode:
    def __init__(self, match: Match):
        self.match = match
        self.parent_identifier = match.next_match_identifier
        self.parent_slot = parent_slot(match.match_index) if match.next_match_identifier else None
        self.children: List[str] = []

    def __repr__(self):
        return f"BracketNode({self.match.identifier} -> {self.parent_identifier}:{self.parent_slot})"


class BracketTree:
    """Arena of match nodes keyed by identifier."""

    def __init__(self, matches: List[Match]):
        if not matches:
            raise DataIntegrityError("Bracket is empty; generate a new bracket first.")
        ordered = sorted(matches, key=lambda m: (m.round_index, m.match_index))
        self.nodes: Dict[str, BracketNode] = {m.identifier: BracketNode(m) for m in ordered}
        for node in self.nodes.values():
            if node.parent_identifier:
                parent = self.nodes.get(node.parent_identifier)
                if parent is None:
                    raise DataIntegrityError(
                        f"Match {node.match.identifier} points to missing match {node.parent_identifier}"
                    )
                parent.children.append(node.match.identifier)

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, identifier):
        return identifier in self.nodes

    def node(self, identifier: str) -> BracketNode:
        try:
            return self.nodes[identifier]
        except KeyError:
            raise DataIntegrityError(f"Match {identifier} not found in bracket") from None

    def match(self, identifier: str) -> Match:
        return self.node(identifier).match

    def parent(self, identifier: str) -> Optional[Match]:
        node = self.node(identifier)
        if node.parent_identifier is None:
            return None
        return self.nodes[node.parent_identifier].match

    @property
    def matches(self) -> List[Match]:
        return [node.match for node in self.nodes.values()]

    @property
    def round_count(self) -> int:
        return max(m.round_index for m in self.matches) + 1

    def rounds(self) -> List[List[Match]]:
        """Matches grouped by round, in round then match order."""
        grouped = [[] for _ in range(self.round_count)]
        for match in self.matches:
            grouped[match.round_index].append(match)
        return grouped

    @property
    def final(self) -> Match:
        roots = [n.match for n in self.nodes.values() if n.parent_identifier is None]
        if len(roots) != 1:
            raise DataIntegrityError(f"Bracket must have exactly one final match, found {len(roots)}")
        return roots[0]

    @property
    def champion(self) -> Optional[str]:
        final = self.final
        return final.winner_name if final.is_completed else None

    def validate(self):
        """
        Check the stored set is a single-rooted binary tree of the expected shape.
        Raises DataIntegrityError on the first violation found.
        """
        rounds = self.rounds()
        slot_count = len(rounds[0]) * 2
        try:
            round_count = calculate_round_count(slot_count)
        except ValidationError as e:
            raise DataIntegrityError(str(e)) from e
        if round_count != len(rounds):
            raise DataIntegrityError(
                f"Expected {round_count} rounds for {slot_count} slots, found {len(rounds)}"
            )
        for round_index, round_matches in enumerate(rounds):
            expected = slot_count // 2 ** (round_index + 1)
            if len(round_matches) != expected:
                raise DataIntegrityError(
                    f"Round {round_index + 1} has {len(round_matches)} matches, expected {expected}"
                )
            for match_index, match in enumerate(round_matches):
                if match.match_index != match_index or match.identifier != match_identifier(round_index, match_index):
                    raise DataIntegrityError(f"Match {match.identifier} is out of position")
                expected_parent = next_match_identifier(round_index, match_index, round_count)
                if match.next_match_identifier != expected_parent:
                    raise DataIntegrityError(
                        f"Match {match.identifier} feeds {match.next_match_identifier}, expected {expected_parent}"
                    )
                fed_by = len(self.nodes[match.identifier].children)
                if fed_by != (2 if round_index else 0):
                    raise DataIntegrityError(f"Match {match.identifier} is fed by {fed_by} matches")
                if match.winner_name and not match.is_completed:
                    raise DataIntegrityError(f"Match {match.identifier} has a winner but is not completed")
        return True
