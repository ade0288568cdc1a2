import argparse
import json
import sys

from core.exceptions import GroupingError
from data.config import get_config
from logger_config import start_session, end_session


def load_points(path):
    """Read a JSON list of [x, y] pairs or {"x", "y", "visitor_id"} objects"""
    with open(path) as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON list of points")

    coords = []
    visitor_ids = []
    for i, item in enumerate(raw):
        if isinstance(item, dict):
            if "x" not in item or "y" not in item:
                raise ValueError(f"Point {i} missing 'x' or 'y'")
            coords.append((item["x"], item["y"]))
            visitor_ids.append(item.get("visitor_id"))
        else:
            coords.append(tuple(item))
            visitor_ids.append(None)

    return coords, (visitor_ids if any(visitor_ids) else None)


def display_summary(result):
    params = result["parameters"]
    print(f"\n🚌 BUS GROUPING SUMMARY")
    print("=" * 60)
    print(f"Points: {result['point_count']}  Groups: {result['group_count']}  "
          f"Band: [{params['min_size']}, {params['max_size']}]  Linkage: {params['linkage_method']}")
    print(f"Execution time: {result['execution_time']:.2f}s")
    print("-" * 60)
    print(f"{'loop':>5} {'label':>6} {'size':>6} {'seat use':>9}")
    for group in result["data"]:
        utilization = group["size"] / params["max_size"] * 100
        flag = "  ⚠️ below minimum" if group["size"] < params["min_size"] else ""
        print(f"{group['loop']:>5} {group['label']:>6} {group['size']:>6} {utilization:>8.1f}%{flag}")
    print("=" * 60)


def main(argv=None):
    config = get_config()

    parser = argparse.ArgumentParser(description='Group event visitors into bus loads')
    parser.add_argument('points', help='JSON file with visitor coordinates')
    parser.add_argument('--max-size', type=int, default=config['max_size'], help='Seats per bus')
    parser.add_argument('--min-size', type=int, default=config['min_size'], help='Preferred minimum load')
    parser.add_argument('--linkage', default=config['linkage_method'],
                        choices=['complete', 'average', 'single'], help='Linkage rule')
    parser.add_argument('--output', help='Write the result JSON here')
    args = parser.parse_args(argv)

    # Imported late so --help works without touching the log directory
    from services.grouping_service import GroupingService

    try:
        coords, visitor_ids = load_points(args.points)
    except (OSError, ValueError, TypeError) as e:
        print(f"❌ Could not read points from {args.points}: {e}")
        return 1

    logger = start_session(config['log_dir'])
    try:
        result = GroupingService(config=config, logger=logger).run_grouping(
            coords, max_size=args.max_size, min_size=args.min_size,
            linkage_method=args.linkage, visitor_ids=visitor_ids)
    except GroupingError as e:
        print(f"❌ Grouping failed: {e}")
        print(f"📋 Error type: {type(e).__name__}")
        return 1
    finally:
        end_session()

    display_summary(result)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(result, f, indent=2)
        print(f"💾 Results saved to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
