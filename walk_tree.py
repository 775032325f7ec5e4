
"""
Script to walk the course files tree of a running server via the REST API.
Make sure the server is running before executing this script.

Usage:
    python walk_tree.py CONTEXT_ID [USER_ID]
"""

import requests
import sys
import os


def _console_supports_utf8() -> bool:
    try:
        enc = getattr(sys.stdout, "encoding", None)
        return enc is not None and "utf" in enc.lower()
    except (AttributeError, LookupError):
        return False


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"
_DIR_CHAR = "\U0001F4C1" if _console_supports_utf8() else "[D]"

BASE_URL = os.environ.get("COURSEFILES_BASE_URL", "http://127.0.0.1:8000")
MAX_DEPTH = 6


def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  python -m coursefiles.main --port 8000")
    return False


def fetch_node(context_id, user_id, params=None):
    """Fetch one node; returns None when it is absent for this user."""
    query = {k: v for k, v in (params or {}).items() if v is not None and k != "contextid"}
    response = requests.get(f"{BASE_URL}/browse/{context_id}", params=query,
                            headers={"X-User-Id": str(user_id)}, timeout=5)
    if response.status_code == 404:
        return None
    response.raise_for_status()
    return response.json()


def walk(context_id, user_id, params=None, depth=0):
    """Print a node and recurse into its directory children."""
    node = fetch_node(context_id, user_id, params)
    if node is None:
        return
    for child in node["children"]:
        marker = _DIR_CHAR if child["is_directory"] else " "
        size = f" ({child['filesize']} bytes)" if child.get("filesize") else ""
        print(f"{'  ' * depth}{marker} {child['visible_name']}{size}")
        if child["is_directory"] and depth < MAX_DEPTH:
            child_params = child["params"]
            walk(child_params["contextid"], user_id, child_params, depth + 1)


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    context_id = int(sys.argv[1])
    user_id = int(sys.argv[2]) if len(sys.argv) > 2 else 2

    print("=" * 60)
    print("Course Files - Tree Walker")
    print("=" * 60)
    if not check_server():
        sys.exit(1)

    try:
        walk(context_id, user_id)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error walking tree: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
