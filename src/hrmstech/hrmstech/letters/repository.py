from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LetterTemplate


class LetterTemplateRepository(Protocol):
    def list_all(self, org_id: str) -> Sequence[LetterTemplate]:
        raise NotImplementedError

    def get(self, org_id: str, template_id: int) -> Optional[LetterTemplate]:
        raise NotImplementedError

    def create(self, *, org_id: str, name: str, content: str) -> int:
        raise NotImplementedError

    def update(self, org_id: str, template_id: int, *, name: str, content: str) -> bool:
        raise NotImplementedError

    def delete(self, org_id: str, template_id: int) -> bool:
        raise NotImplementedError
