"""
Generation Engine for lottocore.

Bounded rejection sampling: random candidates are drawn, de-duplicated
within the batch and tested against the caller's ordered constraint list.
The loop stops when enough entries were accepted or the attempt budget is
spent. Running out of attempts is not an error; the report says which
constraints rejected how many candidates so the caller can relax them.
"""
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Union

import numpy as np
from loguru import logger

from lottocore.config import MAX_REJECTED_EXAMPLES
from lottocore.constraints import ConstraintEvaluator
from lottocore.models import (
    ConstraintKind,
    Entry,
    GenerationReport,
    GenerationRequest,
    GenerationRequestError,
    GenerationResult,
    HistoricalRecord,
)
from lottocore.profiles import Profile

RandomSource = Union[None, int, np.random.Generator]


def validate_request(profile: Profile, request: GenerationRequest) -> None:
    """
    Rejects malformed requests before any work is done.

    Raises:
        GenerationRequestError: On any precondition violation.
    """
    if request.quantity <= 0:
        raise GenerationRequestError("quantity must be greater than zero")
    if request.max_attempts < 1:
        raise GenerationRequestError("max_attempts must be at least 1")

    fixed = request.fixed_numbers
    if profile.is_columnar and fixed:
        raise GenerationRequestError(
            f"fixed_numbers are not supported for columnar profile {profile.name}"
        )
    if len(set(fixed)) != len(fixed):
        raise GenerationRequestError("fixed_numbers must not contain duplicates")
    if not all(profile.min_number <= n <= profile.max_number for n in fixed):
        raise GenerationRequestError(
            f"fixed_numbers must lie within {profile.min_number}..{profile.max_number}"
        )
    if len(fixed) > profile.entry_size:
        raise GenerationRequestError("fixed_numbers must not exceed entry_size")

    companion = request.fixed_companion_value
    if companion is not None:
        if not profile.has_companion_category:
            raise GenerationRequestError(
                f"Profile {profile.name} has no companion category"
            )
        if companion not in profile.companion_values():
            start, end = profile.companion_range
            raise GenerationRequestError(
                f"fixed_companion_value must lie within {start}..{end}"
            )


class GenerationEngine:
    """
    Produces distinct entries that satisfy a request's constraints.

    Args:
        evaluator: Constraint evaluator; a default one is built if omitted.
    """

    def __init__(self, evaluator: Optional[ConstraintEvaluator] = None):
        self.evaluator = evaluator or ConstraintEvaluator()
        logger.info("GenerationEngine initialized.")

    def generate(
        self,
        profile: Profile,
        request: GenerationRequest,
        previous_record: Optional[HistoricalRecord] = None,
        rng: RandomSource = None,
        created_at: Optional[datetime] = None,
    ) -> GenerationResult:
        """
        Runs the rejection sampling loop.

        Args:
            profile: Profile to generate for.
            request: Quantity, constraints and fixed values.
            previous_record: Last draw, used by RECURRENCE_FROM_PREVIOUS.
            rng: A numpy Generator, a seed, or None for fresh entropy.
            created_at: Timestamp stamped on every entry; defaults to now.

        Returns:
            GenerationResult: The accepted entries and the diagnostic report.
        """
        validate_request(profile, request)
        rng = np.random.default_rng(rng)
        created_at = created_at or datetime.now()
        fixed = sorted(request.fixed_numbers)
        fixed_set = set(fixed)
        available = np.array(
            [n for n in profile.number_range() if n not in fixed_set], dtype=np.int64
        )

        logger.info(
            f"Generating {request.quantity} entries for {profile.name} "
            f"with constraints {[k.value for k in request.active_constraints]}"
        )

        accepted: List[Entry] = []
        seen = set()
        attempts = 0
        total_rejected = 0
        rejected_per_constraint: Dict[ConstraintKind, int] = {}
        rejected_examples: Dict[ConstraintKind, List[Entry]] = {}

        while len(accepted) < request.quantity and attempts < request.max_attempts:
            attempts += 1
            candidate = self._draw_candidate(profile, request, fixed, available, rng, created_at)

            if candidate.key in seen:
                continue

            failing = self.evaluator.first_failing(
                candidate,
                request.active_constraints,
                profile,
                previous_record,
                request.configs,
            )
            if failing is not None:
                total_rejected += 1
                rejected_per_constraint[failing] = rejected_per_constraint.get(failing, 0) + 1
                examples = rejected_examples.setdefault(failing, [])
                if len(examples) < MAX_REJECTED_EXAMPLES:
                    examples.append(candidate)
                logger.debug(f"Candidate {candidate.numbers} rejected by {failing.value}")
                continue

            accepted.append(candidate)
            seen.add(candidate.key)

        partial = len(accepted) < request.quantity
        report = GenerationReport(
            attempts=attempts,
            generated_count=len(accepted),
            total_rejected=total_rejected,
            rejected_per_constraint=rejected_per_constraint,
            rejected_examples={k: tuple(v) for k, v in rejected_examples.items()},
            partial=partial,
        )

        if partial:
            rejections = {k.value: v for k, v in rejected_per_constraint.items()}
            logger.warning(
                f"Generated only {len(accepted)}/{request.quantity} entries for "
                f"{profile.name} after {attempts} attempts; rejections: {rejections}"
            )
        else:
            logger.info(
                f"Generated {len(accepted)} entries for {profile.name} in {attempts} attempts"
            )
        return GenerationResult(entries=tuple(accepted), report=report)

    def _draw_candidate(self, profile, request, fixed, available, rng, created_at) -> Entry:
        if profile.is_columnar:
            numbers = rng.integers(
                profile.min_number, profile.max_number + 1, size=profile.entry_size
            ).tolist()
        else:
            needed = profile.entry_size - len(fixed)
            picked = rng.choice(available, size=needed, replace=False).tolist() if needed else []
            numbers = sorted(fixed + picked)

        companion = None
        if profile.has_companion_category:
            if request.fixed_companion_value is not None:
                companion = request.fixed_companion_value
            else:
                start, end = profile.companion_range
                companion = int(rng.integers(start, end + 1))

        return Entry(
            id=str(uuid.UUID(bytes=rng.bytes(16), version=4)),
            numbers=tuple(numbers),
            created_at=created_at,
            lottery_type=profile.type,
            companion_value=companion,
        )
