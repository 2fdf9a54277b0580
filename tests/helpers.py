from __future__ import annotations

import io
import zipfile
from typing import Dict, List, Optional, Sequence, Tuple

from docx import Document

from work_protocol.exceptions import ProviderError
from work_protocol.models import CommitInfo, Repository


def make_docx(paragraphs: Optional[Sequence[str]] = None, header: Optional[str] = None,
              pr_table: bool = True) -> bytes:
    """Build a protocol template; the name tag is split over two runs like Word does."""
    document = Document()
    if paragraphs is None:
        p = document.add_paragraph()
        p.add_run("Name: {{ na")
        p.add_run("me }}")
        document.add_paragraph("{{ position }} | {{ date }} | {{ hours }}")
    else:
        for text in paragraphs:
            document.add_paragraph(text)

    if pr_table:
        table = document.add_table(rows=3, cols=3)
        table.cell(0, 0).text = "{%tr for pr in prs %}"
        table.cell(1, 0).text = "#{{ pr.num }}"
        table.cell(1, 1).text = "{{ pr.title }}"
        table.cell(1, 2).text = "{{ pr.sha }}/{{ pr.hour }}"
        table.cell(2, 0).text = "{%tr endfor %}"

    if header is not None:
        document.sections[0].header.add_paragraph(header)

    out = io.BytesIO()
    document.save(out)
    return out.getvalue()


def read_part(docx: bytes, prefix: str = "word/document.xml") -> str:
    """Concatenated XML of every part whose name starts with ``prefix``."""
    with zipfile.ZipFile(io.BytesIO(docx)) as zf:
        return "".join(zf.read(n).decode("utf-8") for n in zf.namelist() if n.startswith(prefix))


class FakeFetcher:
    """In-memory stand-in for GitHubFetcher."""

    def __init__(self, repos: Sequence[Repository], commits: Dict[str, List[CommitInfo]]) -> None:
        self.repos = list(repos)
        self.commits = commits
        self.fail = False
        self.calls: List[Tuple] = []

    def list_repositories(self) -> List[Repository]:
        if self.fail:
            raise ProviderError("boom")
        return list(self.repos)

    def list_commits(self, repo_full_names, from_date, to_date, author=None):
        self.calls.append((tuple(repo_full_names), from_date, to_date, author))
        if self.fail:
            raise ProviderError("boom")
        return [(name, list(self.commits.get(name, []))) for name in repo_full_names]
