"""
Self-Check Verification Unit Tests
Tests for core/board/verification.py

Tests:
- A freshly built commitment passes every check
- Tampered proofs, flipped flags and missing coordinates are reported
  with a challenge, never raised
- Claim bundles must claim every hit once, in canonical order
"""
import pytest

from core.board import canonicalize_claims, verify_claim, verify_commitment
from core.crypto.hashing import keccak256, to_hex
from core.schemas.commitment import BoardCommitment, ClaimBundle, ProofEntry


FORGED = to_hex(keccak256(b"forged"))


def _replace(commitment: BoardCommitment, key: str, entry: ProofEntry | None) -> BoardCommitment:
    proofs = dict(commitment.proofs)
    if entry is None:
        del proofs[key]
    else:
        proofs[key] = entry
    return BoardCommitment(root=commitment.root, proofs=proofs)


def _bundle(entries) -> ClaimBundle:
    entries = list(entries)
    return ClaimBundle(
        sorted_proofs=[list(p) for p, _, _ in entries],
        coordinate_numbers=[r for _, r, _ in entries],
        coordinate_literals=[c for _, _, c in entries],
    )


@pytest.fixture
def fleet_claim(committed_fleet):
    _, index, _ = committed_fleet
    return canonicalize_claims(index)


class TestVerifyCommitment:
    """Tests for verify_commitment()."""

    def test_valid_commitment(self, fleet_commitment, geometry, assert_check_passed):
        result = verify_commitment(fleet_commitment, geometry)
        assert result.ok
        assert result.challenge is None
        for check_id in ("coverage", "hit_count", "proofs"):
            assert_check_passed(result, check_id)

    def test_tampered_proof(self, fleet_commitment, geometry, assert_check_failed):
        entry = fleet_commitment.proofs["3-C"]
        forged = ProofEntry(hit=entry.hit, proof=[FORGED] + entry.proof[1:])
        result = verify_commitment(_replace(fleet_commitment, "3-C", forged), geometry)

        assert not result.ok
        assert_check_failed(result, "proofs")
        assert result.challenge.kind == "cell_leaf"
        assert result.challenge.key == "3-C"

    def test_flipped_hit_flag(self, fleet_commitment, geometry, assert_check_failed):
        entry = fleet_commitment.proofs["1-A"]
        flipped = ProofEntry(hit=False, proof=entry.proof)
        result = verify_commitment(_replace(fleet_commitment, "1-A", flipped), geometry)

        assert not result.ok
        assert_check_failed(result, "proofs")
        assert_check_failed(result, "hit_count")
        assert result.challenge.key == "1-A"

    def test_missing_coordinate(self, fleet_commitment, geometry, assert_check_failed):
        result = verify_commitment(_replace(fleet_commitment, "10-J", None), geometry)

        assert not result.ok
        assert_check_failed(result, "coverage")
        coverage = [c for c in result.checks if c.check_id == "coverage"][0]
        assert coverage.details["missing"] == ["10-J"]
        assert result.challenge.kind == "board_root"

    def test_wrong_root(self, fleet_commitment, geometry):
        forged = BoardCommitment(root=FORGED, proofs=fleet_commitment.proofs)
        result = verify_commitment(forged, geometry)
        assert not result.ok
        assert result.error_count == 1


class TestVerifyClaim:
    """Tests for verify_claim()."""

    def test_canonical_claim(self, fleet_claim, fleet_commitment, geometry):
        result = verify_claim(fleet_claim, fleet_commitment, geometry)
        assert result.ok
        assert result.passed_count == 4

    def test_reordered_claim(self, fleet_claim, fleet_commitment, geometry,
                             assert_check_passed, assert_check_failed):
        entries = list(fleet_claim.entries())
        entries[0], entries[1] = entries[1], entries[0]
        result = verify_claim(_bundle(entries), fleet_commitment, geometry)

        assert not result.ok
        assert_check_passed(result, "claim_entries")
        assert_check_passed(result, "claim_coverage")
        assert_check_failed(result, "claim_order")

    def test_claimed_miss(self, fleet_claim, fleet_commitment, geometry, assert_check_failed):
        entries = list(fleet_claim.entries())
        miss = fleet_commitment.proofs["1-E"]
        entries[-1] = (miss.proof, 1, "E")
        result = verify_claim(_bundle(entries), fleet_commitment, geometry)

        assert not result.ok
        assert_check_failed(result, "claim_entries")
        assert_check_failed(result, "claim_coverage")
        assert result.challenge.kind == "claim_entry"
        assert result.challenge.reason == "coordinate_is_miss"
        assert result.challenge.claim_index == 19

    def test_duplicate_entry(self, fleet_claim, fleet_commitment, geometry):
        entries = list(fleet_claim.entries())
        entries[-1] = entries[0]
        result = verify_claim(_bundle(entries), fleet_commitment, geometry)

        assert not result.ok
        assert result.challenge.reason == "duplicate_coordinate"
        assert result.challenge.key == "1-A"

    def test_forged_claim_proof(self, fleet_claim, fleet_commitment, geometry):
        entries = list(fleet_claim.entries())
        _, row, label = entries[5]
        entries[5] = ([FORGED], row, label)
        result = verify_claim(_bundle(entries), fleet_commitment, geometry)

        assert not result.ok
        assert result.challenge.reason == "proof_invalid"
        assert result.challenge.claim_index == 5

    def test_short_claim(self, fleet_claim, fleet_commitment, geometry, assert_check_failed):
        entries = list(fleet_claim.entries())[:-1]
        result = verify_claim(_bundle(entries), fleet_commitment, geometry)

        assert not result.ok
        assert_check_failed(result, "claim_length")
        assert_check_failed(result, "claim_coverage")
