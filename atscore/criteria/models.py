from dataclasses import dataclass


@dataclass(frozen=True)
class Rubric:
    """Static evaluation descriptor for one category.

    rubric is self-contained and used when no job context is given;
    job_rubric, when present, replaces it once a job description is known.
    """

    category: str
    rubric: str
    job_rubric: str | None = None
    requires_job_description: bool = False
