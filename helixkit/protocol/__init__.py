"""Property values, nodes, edges, traversal results and HTTP request and response types."""