import logging
from typing import Awaitable, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Compensation = Callable[[], Awaitable[None]]


class ListingSaga:
    """
    Ordered record of entered steps and how to undo each one.
    On failure, `compensate()` runs the undo actions newest-first.
    """

    def __init__(self, submission_ref: str):
        self.submission_ref = submission_ref
        self.registered: List[Tuple[str, Compensation]] = []
        self.current_step = None

    def begin(self, step: str, compensation: Optional[Compensation] = None):
        """
        Enter a step. The compensation is registered up front, so it must also
        undo a step that only partly happened.
        """
        self.current_step = step
        if compensation is not None:
            self.registered.append((step, compensation))
        logger.debug(f"[Saga {self.submission_ref}] step started: {step}")

    async def compensate(self) -> List[str]:
        """Undo completed steps in reverse. Returns the steps that could not be undone."""
        failed = []
        while self.registered:
            step, compensation = self.registered.pop()
            try:
                await compensation()
                logger.info(f"[Saga {self.submission_ref}] compensated step: {step}")
            except Exception as e:
                failed.append(step)
                logger.error(
                    f"[Saga {self.submission_ref}] compensation failed for step {step}: {e}",
                    extra={"extra_data": {"submission": self.submission_ref, "step": step}}
                )
        return failed
