"""Follow a map from a start key to a leaf, refusing to loop."""

from forgetful import CycleDetected, Observer, visiting


def find_leaf(graph: dict[str, str], node: str, seen: Observer[str]) -> str:
    with visiting(seen, node):
        nxt = graph.get(node)
        if nxt is None:
            return node
        return find_leaf(graph, nxt, seen)


def main() -> None:
    graph = {"A": "B", "B": "C", "C": "A", "D": "E"}
    seen: Observer[str] = Observer()

    # Prints "error: cycle detected: 'A'" then "found E!"
    for start in ("A", "D"):
        try:
            print(f"found {find_leaf(graph, start, seen)}!")
        except CycleDetected as err:
            print(f"error: {err}")


if __name__ == "__main__":
    main()
