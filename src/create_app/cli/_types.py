"""Template catalog and resolved configuration types."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TemplateVariant:
    """A directly instantiable template, stored as ``template-<id>``."""

    id: str
    label: str


@dataclass(frozen=True)
class TemplateFamily:
    """A group of related templates, e.g. one framework in several languages."""

    id: str
    label: str
    description: str
    variants: tuple[TemplateVariant, ...] = ()


FAMILIES: tuple[TemplateFamily, ...] = (
    TemplateFamily(
        id="node",
        label="Node",
        description="Plain Node.js application with an entry script.",
        variants=(
            TemplateVariant("node", "Node JavaScript"),
            TemplateVariant("node-ts", "Node TypeScript"),
        ),
    ),
    TemplateFamily(
        id="react",
        label="React",
        description="Single-page React application bundled with Vite.",
        variants=(
            TemplateVariant("react", "React JavaScript"),
            TemplateVariant("react-ts", "React TypeScript"),
        ),
    ),
)


def template_ids() -> list[str]:
    """All ids that name a template directory, in catalog order."""
    ids: list[str] = []
    for family in FAMILIES:
        candidates = [v.id for v in family.variants] or [family.id]
        ids.extend(i for i in candidates if i not in ids)
    return ids


@dataclass(frozen=True)
class ResolvedConfig:
    """Everything needed to instantiate a template."""

    target_directory: str
    package_name: str
    template_id: str

    def root(self, cwd: Path) -> Path:
        """The destination, always under *cwd* even for an absolute target."""
        return cwd / self.target_directory.lstrip("/")
