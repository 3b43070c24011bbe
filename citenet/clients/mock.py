# citenet/clients/mock.py

from __future__ import annotations

import itertools
from typing import Dict, List, Optional, Sequence, Union

from citenet.clients.base import JobBody, JobState, JobStatus
from citenet.errors import JobSubmissionFailed, PaperNotFound
from citenet.models.paper import Paper, PaperRef
from citenet.search.filters import JobType, SearchFilters


# ---------------------------------------------------------------------------
# Canned fixtures
# ---------------------------------------------------------------------------

MOCK_ROOT = Paper(
    id="mock-root",
    title="Attention Is All You Need",
    authors="Ashish Vaswani, Noam Shazeer, Niki Parmar, Jakob Uszkoreit",
    year=2017,
    fields_of_study=("Computer Science",),
    citation_count=98000,
    reference_count=40,
    influential_citation_count=12000,
    score=1.0,
    tldr="A new simple network architecture based solely on attention mechanisms.",
    publication_type="conference",
    journal_name="NeurIPS",
)

MOCK_RELATED: Sequence[Paper] = (
    Paper(
        id="mock-bert",
        title="BERT: Pre-training of Deep Bidirectional Transformers",
        authors="Jacob Devlin, Ming-Wei Chang, Kenton Lee, Kristina Toutanova",
        year=2019,
        fields_of_study=("Computer Science",),
        citation_count=81000,
        score=0.93,
        publication_type="conference",
    ),
    Paper(
        id="mock-gpt3",
        title="Language Models are Few-Shot Learners",
        authors="Tom Brown, Benjamin Mann, Nick Ryder",
        year=2020,
        fields_of_study=("Computer Science",),
        citation_count=25000,
        score=0.88,
        publication_type="conference",
    ),
    Paper(
        id="mock-vit",
        title="An Image is Worth 16x16 Words",
        authors="Alexey Dosovitskiy, Lucas Beyer",
        year=2021,
        fields_of_study=("Computer Science",),
        citation_count=30000,
        score=0.81,
        publication_type="conference",
    ),
    Paper(
        id="mock-alphafold",
        title="Highly accurate protein structure prediction with AlphaFold",
        authors="John Jumper, Richard Evans",
        year=2021,
        fields_of_study=("Biology", "Computer Science"),
        citation_count=20000,
        score=0.52,
        publication_type="journal",
    ),
    Paper(
        id="mock-seq2seq",
        title="Sequence to Sequence Learning with Neural Networks",
        authors="Ilya Sutskever, Oriol Vinyals, Quoc V. Le",
        year=2014,
        fields_of_study=("Computer Science",),
        citation_count=22000,
        score=0.77,
        publication_type="conference",
    ),
    Paper(
        id="mock-bahdanau",
        title="Neural Machine Translation by Jointly Learning to Align and Translate",
        authors="Dzmitry Bahdanau, Kyunghyun Cho, Yoshua Bengio",
        year=2014,
        fields_of_study=("Computer Science", "Mathematics"),
        citation_count=27000,
        score=0.75,
        publication_type="conference",
    ),
)


class MockSearchBackend:
    """
    Deterministic stand-in for the Veritus API.

    Implements JobClient and PaperLookup over in-memory fixtures. Jobs report
    `processing` for `polls_before_success` status checks, then succeed with
    the related papers (or fail if `fail_with` is set).
    """

    def __init__(
        self,
        root: Paper = MOCK_ROOT,
        related: Sequence[Paper] = MOCK_RELATED,
        extra_papers: Sequence[Paper] = (),
        polls_before_success: int = 0,
        fail_with: Optional[str] = None,
        reject_submission: Optional[str] = None,
    ) -> None:
        self.root = root
        self.related: List[Paper] = list(related)
        self.polls_before_success = polls_before_success
        self.fail_with = fail_with
        self.reject_submission = reject_submission

        self._papers: Dict[str, Paper] = {
            p.id: p for p in itertools.chain([root], self.related, extra_papers)
        }
        self._polls: Dict[str, int] = {}
        self._limits: Dict[str, int] = {}
        self._job_counter = itertools.count(1)

        # Recorded calls, handy for assertions
        self.created_jobs: List[Dict[str, object]] = []
        self.status_calls = 0

    async def resolve_paper(self, ref: Union[str, PaperRef]) -> Paper:
        if isinstance(ref, str):
            ref = PaperRef(corpus_id=ref)

        if ref.corpus_id:
            paper = self._papers.get(ref.corpus_id)
            if paper is None:
                raise PaperNotFound(ref.corpus_id)
            return paper

        title = (ref.title or "").casefold()
        for paper in self._papers.values():
            if title and title in paper.title.casefold():
                return paper
        raise PaperNotFound(str(ref))

    async def create_job(
        self,
        job_type: JobType,
        filters: SearchFilters,
        body: JobBody,
        limit: int,
    ) -> str:
        if self.reject_submission:
            raise JobSubmissionFailed(self.reject_submission)

        job_id = f"mock-job-{next(self._job_counter)}"
        self._polls[job_id] = 0
        self._limits[job_id] = limit
        self.created_jobs.append(
            {"job_id": job_id, "job_type": job_type, "filters": filters, "body": body, "limit": limit}
        )
        return job_id

    async def get_job_status(self, job_id: str) -> JobStatus:
        self.status_calls += 1
        polls = self._polls.get(job_id, 0)
        self._polls[job_id] = polls + 1

        if polls < self.polls_before_success:
            return JobStatus(state=JobState.PROCESSING)
        if self.fail_with is not None:
            return JobStatus(state=JobState.ERROR, error=self.fail_with)

        limit = self._limits.get(job_id, len(self.related))
        return JobStatus(state=JobState.SUCCESS, results=self.related[:limit])
