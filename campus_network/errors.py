"""Input errors raised while building or optimizing a campus network."""


class NetworkError(ValueError):
    """Base class for invalid graph input."""


class UnknownNodeReference(NetworkError):
    """An edge names a building id that is not part of the node list."""

    def __init__(self, edge_id: str, node_id: str):
        self.edge_id = edge_id
        self.node_id = node_id
        super().__init__(f"Edge '{edge_id}' references unknown node '{node_id}'")


class InvalidEdge(NetworkError):
    """Malformed connection: bad weight, self-loop or duplicate pair."""


class DuplicateNode(NetworkError):
    """A building id is used more than once in the same graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Duplicate node id '{node_id}'")
