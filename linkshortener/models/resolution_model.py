from dataclasses import dataclass

from linkshortener.constants import ResolveStatus
from linkshortener.models.link_model import LinkModel


# fmt: off
@dataclass(frozen=True)
class ResolutionModel:
    status: ResolveStatus            # Outcome of the resolution
    target: str | None = None        # Original URL, set only on success
    link: LinkModel | None = None    # Link state after the resolution, None if not found
# fmt: on

    @property
    def ok(self) -> bool:
        return self.status is ResolveStatus.SUCCESS
