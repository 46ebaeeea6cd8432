# mst.py
import argparse
import json
import sys
from pathlib import Path

import pandas as pd

from campus_network.build_graph import tree_summary
from campus_network.candidate_generation import CANDIDATE_METHODS, generate_candidate_edges
from campus_network.config import configure_logging
from campus_network.errors import NetworkError
from campus_network.mst import compute_mst
from campus_network.utils import Node, parse_input


def parse_args(argv):
    parser = argparse.ArgumentParser(description="Compute the cheapest network connecting campus buildings.")
    parser.add_argument("input", type=Path, help="Exported network (.json) or building list (.csv)")
    parser.add_argument(
        "--candidates",
        choices=CANDIDATE_METHODS,
        default="complete",
        help="How to generate connections for CSV input (default: complete)",
    )
    parser.add_argument("--max-length", type=float, default=None, help="Drop CSV candidates longer than this (meters)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser.parse_args(argv)


def load_buildings(csv_path, method="complete", max_length=None):
    """Read Latitude/Longitude(/Name) rows and generate candidate connections."""
    coords = pd.read_csv(csv_path)
    missing = {"Latitude", "Longitude"} - set(coords.columns)
    if missing:
        raise NetworkError(f"CSV is missing columns: {', '.join(sorted(missing))}")

    coords = coords.dropna(subset=["Latitude", "Longitude"]).reset_index(drop=True)
    if len(coords) < 2:
        raise NetworkError("Need at least 2 points")

    nodes = []
    for i, row in coords.iterrows():
        name = row["Name"] if "Name" in coords.columns and pd.notna(row["Name"]) else f"Building {i + 1}"
        nodes.append(Node(id=str(i + 1), name=str(name), lat=float(row["Latitude"]), lng=float(row["Longitude"])))

    return nodes, generate_candidate_edges(nodes, method=method, max_length=max_length)


def load_network(json_path):
    request = parse_input(json.loads(Path(json_path).read_text(encoding="utf-8")))
    return request.nodes, request.edges


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level.upper())

    try:
        if args.input.suffix.lower() == ".csv":
            nodes, edges = load_buildings(args.input, args.candidates, args.max_length)
        else:
            nodes, edges = load_network(args.input)

        result = compute_mst(nodes, edges)
        output = result.to_response()
        output["summary"] = tree_summary(nodes, result)
        print(json.dumps(output))
        return 0

    except (ValueError, OSError) as e:
        print(json.dumps({"error": str(e)}))
        return 1


if __name__ == "__main__":
    sys.exit(main())
