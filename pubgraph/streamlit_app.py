"""Streamlit app that visualizes the package graph of ``PUBGRAPH_PACKAGE_DIR``."""

from __future__ import annotations

import networkx as nx
import streamlit as st
from pyvis.network import Network

from pubgraph.domain.errors import PackageGraphError
from pubgraph.domain.package_graph import DependencyType
from pubgraph.services.graph_builder import find_cycles, to_networkx
from pubgraph.settings import get_settings
from pubgraph.wiring import provide_graph_builder


TYPE_COLORS = {
    DependencyType.VERSION_CONTROL: "#f97316",
    DependencyType.FILESYSTEM_PATH: "#22c55e",
    DependencyType.REGISTRY_HOSTED: "#0ea5e9",
    DependencyType.TOOLCHAIN_BUNDLED: "#a855f7",
}


def _build_network(graph: nx.DiGraph) -> Network:
    """Convert a NetworkX graph into a PyVis network styled by dependency type."""

    network = Network(height="720px", width="100%", directed=True)
    for node, attributes in graph.nodes(data=True):
        dependency_type: DependencyType = attributes["dependency_type"]
        shape = "box" if attributes.get("is_root") else "dot"
        network.add_node(
            node,
            label=node,
            title=str(attributes.get("path")),
            color=TYPE_COLORS[dependency_type],
            shape=shape,
        )

    for source, target in graph.edges:
        network.add_edge(source, target, arrows="to")

    return network


def main() -> None:
    """Render the package graph in a Streamlit page."""

    st.set_page_config(page_title="Package graph", layout="wide")
    st.title("Package Dependency Graph")
    st.caption("Edges point from a package to the packages it depends on.")

    settings = get_settings()
    package_dir = settings.package_dir.resolve()
    try:
        package_graph = provide_graph_builder(settings).build_from_path(package_dir)
    except PackageGraphError as exc:
        st.error(str(exc))
        return

    graph = to_networkx(package_graph)
    pyvis_network = _build_network(graph)
    html = pyvis_network.generate_html(notebook=False)

    st.subheader(f"Interactive graph for {package_graph.root.name}")
    st.components.v1.html(html, height=750, scrolling=True)

    st.subheader("Package summary")
    st.write(
        {
            dependency_type.name.lower(): len(
                [
                    node
                    for node in package_graph
                    if node.dependency_type is dependency_type
                ]
            )
            for dependency_type in DependencyType
        }
        | {"dependencies": graph.size(), "cycles": len(find_cycles(package_graph))}
    )

    st.subheader("Packages")
    st.code(str(package_graph))


if __name__ == "__main__":
    main()
