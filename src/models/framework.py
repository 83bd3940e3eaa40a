#!/usr/bin/env python3
"""
Framework module for the benchmark harness.

A Framework is one variant of the kanban demo application. The harness only
needs to know where the project lives and which directories prove that it
has been built.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class Framework:
    """
    A framework variant of the kanban demo application.

    The build check passes if any one of ``build_check`` exists inside the
    project directory (frameworks differ in where their build output lands).
    """

    name: str  # Display name, also passed to the measurement tool
    dir: str  # Project directory relative to the project root
    build_check: List[str] = field(default_factory=lambda: ["dist"])

    def project_path(self, project_root: Path) -> Path:
        return Path(project_root) / self.dir

    def build_exists(self, project_root: Path) -> bool:
        """Return True if any of the build output directories exists."""
        project_path = self.project_path(project_root)
        for build_dir in self.build_check:
            if (project_path / build_dir).exists():
                return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "dir": self.dir,
            "build_check": list(self.build_check),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Framework":
        """
        Create a Framework from a config mapping.

        Accepts both ``build_check`` and ``buildCheck`` keys, and a single
        string as well as a list of directories.
        """
        build_check = data.get("build_check", data.get("buildCheck", ["dist"]))
        if isinstance(build_check, str):
            build_check = [build_check]
        return cls(
            name=str(data["name"]),
            dir=str(data["dir"]),
            build_check=[str(d) for d in build_check],
        )


DEFAULT_FRAMEWORKS: List[Framework] = [
    Framework("Next.js", "kanban-nextjs", [".next", "dist"]),
    Framework("Nuxt", "kanban-nuxt", [".output", "dist"]),
    Framework("Analog", "kanban-analog", ["dist"]),
    Framework("SolidStart", "kanban-solidstart", [".output", "dist"]),
    Framework("SvelteKit", "kanban-sveltekit", [".svelte-kit", "build"]),
    Framework("Qwik", "kanban-qwikcity", ["dist"]),
    Framework("Astro", "kanban-htmx", ["dist"]),
    Framework("TanStack Start", "kanban-tanstack", [".output", "dist"]),
    Framework("TanStack Start + Solid", "kanban-tanstack-solid", [".output", "dist"]),
    Framework("Marko", "kanban-marko", ["dist", "build"]),
    Framework("Go-Datastar", "kanban-go-datastar", ["bin"]),
    Framework("Hono-Datastar", "kanban-hono-datastar", ["dist"]),
]
