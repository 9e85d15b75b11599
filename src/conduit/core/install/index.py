"""Install index rendering."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from conduit.core.artifacts.models import ArtifactKind
from conduit.core.utils.text import format_frontmatter, render_bundled_template

from .partition import Partition

INDEX_TEMPLATE = "index.md"


def _one_line(text: str) -> str:
    return " ".join(str(text).split())


class IndexGenerator:
    """Renders the ``index.md`` that lists every installed command.

    The document is derived only from the partition, so identical input
    gives byte-identical output.
    """

    def __init__(
        self,
        *,
        namespace: str,
        display_name: str,
        install_dir: str,
        frontmatter: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.namespace = namespace
        self.display_name = display_name
        self.install_dir = install_dir
        self.frontmatter = dict(frontmatter or {})

    @property
    def help_command(self) -> str:
        return f"{self.namespace}-help"

    def sections(self, partition: Partition) -> List[Dict[str, Any]]:
        modules: List[Dict[str, Any]] = []
        for module in partition.iter_modules():
            sections = []
            for kind in ArtifactKind.ordered():
                items = partition.items(module, kind)
                if not items:
                    continue
                sections.append(
                    {
                        "label": kind.label,
                        "entries": [
                            {"name": a.name, "description": _one_line(a.description or "") or a.name}
                            for a in items
                        ],
                    }
                )
            modules.append({"name": module, "title": module.upper(), "sections": sections})
        return modules

    def generate(self, partition: Partition) -> str:
        title = self.namespace.upper()
        header: Dict[str, Any] = {
            "name": self.help_command,
            "description": f"{title} - Master Index",
        }
        header.update(self.frontmatter)
        return render_bundled_template(
            INDEX_TEMPLATE,
            {
                "frontmatter": format_frontmatter(header),
                "title": title,
                "display_name": self.display_name,
                "install_dir": self.install_dir,
                "help_command": self.help_command,
                "modules": self.sections(partition),
            },
        )


__all__ = ["IndexGenerator", "INDEX_TEMPLATE"]
