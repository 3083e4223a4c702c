# This file implements job listings for the calling profile.

from __future__ import annotations

from marketplace.api.entities import Job, Profile
from marketplace.api.repositories.job_repository import JobRepository


class JobService:
    def __init__(self, *, jobs: JobRepository) -> None:
        self.jobs = jobs

    def list_unpaid_jobs(self, *, caller: Profile) -> list[Job]:
        return self.jobs.list_unpaid_for_profile(profile_id=caller.id)
