import re

from atscore.evaluation.models import JobContext
from atscore.processor.exceptions import InvalidJobContextError

_FORBIDDEN_JOB_NAME_CHARS = re.compile(r"[<>{}\[\]()'\"\\]")


class JobContextBuilder:
    """Validates optional job inputs and builds a JobContext.

    Blank values count as absent; when both are absent there is no context.
    """

    def __init__(self, max_job_name_length: int = 100, max_job_description_length: int = 2000) -> None:
        self._max_job_name_length = max_job_name_length
        self._max_job_description_length = max_job_description_length

    def build(
        self,
        job_name: str | None = None,
        job_description: str | None = None,
    ) -> JobContext | None:
        """Return a JobContext, or None when no job information was given.

        Raises:
            InvalidJobContextError: if a value is too long or the job name
                                    contains forbidden characters.
        """
        name = (job_name or "").strip() or None
        description = (job_description or "").strip() or None
        if name is not None:
            self._check_job_name(name)
        if description is not None and len(description) > self._max_job_description_length:
            raise InvalidJobContextError(
                f"Job description exceeds maximum length of "
                f"{self._max_job_description_length} characters"
            )
        if name is None and description is None:
            return None
        return JobContext(job_name=name, job_description=description)

    def _check_job_name(self, name: str) -> None:
        if len(name) > self._max_job_name_length:
            raise InvalidJobContextError(
                f"Job name exceeds maximum length of {self._max_job_name_length} characters"
            )
        if _FORBIDDEN_JOB_NAME_CHARS.search(name):
            raise InvalidJobContextError("Job name contains invalid characters")
