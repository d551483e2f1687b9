"""Writes a crate holding generated query handlers."""

from __future__ import annotations

from collections.abc import Mapping
from os import PathLike
from pathlib import Path

from helixkit.generator.query_gen import TraversalGenerator


class ProjectGenerator:
    """Lays out a project directory with a manifest and a traversal module."""

    def __init__(self, project_name: str, output_dir: str | PathLike[str]) -> None:
        self.project_name = project_name
        self.output_dir = Path(output_dir)
        self.dependencies: list[tuple[str, str]] = []
        self.queries: dict[str, str] = {}

    def with_queries(self, queries: Mapping[str, str]) -> ProjectGenerator:
        """Set the query handlers, by name, and return the generator."""
        self.queries = dict(queries)
        return self

    def add_dependency(self, name: str, version: str) -> None:
        self.dependencies.append((name, version))

    def generate(self) -> Path:
        """Write the project and return its directory."""
        project_dir = self.output_dir / self.project_name
        (project_dir / "src").mkdir(parents=True, exist_ok=True)
        (project_dir / "Cargo.toml").write_text(self._manifest(), encoding="utf-8")
        (project_dir / "src" / "lib.rs").write_text("pub mod traversals;\n\n", encoding="utf-8")
        (project_dir / "src" / "traversals.rs").write_text(
            self._traversal_module(), encoding="utf-8"
        )
        return project_dir

    def _manifest(self) -> str:
        lines = [
            "[package]",
            f'name = "{self.project_name}"',
            'version = "0.1.0"',
            'edition = "2021"',
            "",
            "[dependencies]",
            'inventory = "0.3.15"',
            'helix-engine = { path = "../helix-engine" }',
            'helix-gateway = { path = "../helix-gateway" }',
            'protocol = { path = "../protocol" }',
            'get_routes = { path = "../get_routes" }',
        ]
        lines.extend(f'{name} = "{version}"' for name, version in self.dependencies)
        lines.extend(
            [
                "",
                "[profile.release]",
                'strip = "debuginfo"',
                "lto = true",
                'opt-level = "z"',
            ]
        )
        return "\n".join(lines) + "\n"

    def _traversal_module(self) -> str:
        lines = [
            "use helix_engine::graph_core::traversal::TraversalBuilder;",
            "use helix_engine::graph_core::traversal_steps::{SourceTraversalSteps, TraversalSteps};",
            "use get_routes::handler;",
            "use helix_gateway::router::router::{HandlerInput, RouterError};",
            "use protocol::response::Response;",
            "",
        ]
        for query in self.queries.values():
            lines.append("#[handler]")
            lines.append(query)
        return "\n".join(lines) + "\n"


def run_generator(output_dir: str | PathLike[str] = "../") -> Path:
    """Generate the example ``graph_queries`` project under ``output_dir``."""
    first = (
        TraversalGenerator("test_function").v().out("knows").in_("follows").out_e("likes")
    )
    second = TraversalGenerator("test_function2").v().out("knows")
    queries = {
        "test_function": first.generate_code(),
        "test_function2": second.generate_code(),
    }
    project_dir = ProjectGenerator("graph_queries", output_dir).with_queries(queries).generate()

    print("Successfully generated project in ./graph_queries")
    print("To run the generated project:")
    print("  cd graph_queries")
    print("  cargo build")
    return project_dir