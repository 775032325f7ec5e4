#!/usr/bin/env python3
"""
Demo scenario for the course files browser.

Seeds a sample course and prints what different callers can see of it.
"""

import sys
import os
import tempfile

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from coursefiles.main import CourseFilesPlatform
from coursefiles.core.enums import Capability


CALLERS = [
    (1, "site admin"),
    (2, "manager"),
    (3, "student"),
    (None, "anonymous"),
]


def run_demo():
    """Run the demo against a throwaway database."""
    print("=" * 60)
    print("COURSE FILES BROWSER - DEMO")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        config = {
            'database_type': 'sqlite',
            'database_config': {'database_path': os.path.join(tmp, 'demo_coursefiles.db')},
            'wwwroot': 'https://lms.example.edu',
        }
        platform = CourseFilesPlatform(config)

        print("\n1. Creating sample data...")
        platform.create_sample_data()

        print("\n2. Course tree per caller...")
        for user_id, role in CALLERS:
            demonstrate_tree(platform, user_id, role)

        print("\n3. Addressing files directly...")
        demonstrate_direct_access(platform)

        print("\n4. Granting automated backup access to the manager...")
        platform.grants.grant(2, 2, Capability.VIEW_AUTOMATED)
        demonstrate_tree(platform, 2, "manager")

    print("\n" + "=" * 60)
    print("DEMO COMPLETED")
    print("=" * 60)


def demonstrate_tree(platform, user_id, role):
    """Print the tree of the sample course for one caller."""
    print(f"\n  -- {role} (user {user_id}) --")
    node = platform.browse(user_id, 2)
    if node is None:
        print("  (nothing visible)")
        return
    for line in platform.render_tree(node):
        print(f"  {line}")


def demonstrate_direct_access(platform):
    """Resolve a few explicit paths as the manager."""
    lookups = [
        ("course", "summary", 0, "/", "banner.png"),
        ("course", "section", 11, "/", "slides.pdf"),
        ("course", "legacy", 0, "/docs/", "readme.txt"),
        ("course", "legacy", 0, "/missing/", "nothing.txt"),
        ("backup", "automated", 0, "/", "."),
    ]
    for component, filearea, itemid, filepath, filename in lookups:
        node = platform.browse(2, 2, component, filearea, itemid, filepath, filename)
        target = f"{component}/{filearea}/{itemid}{filepath}{filename}"
        if node is None:
            print(f"  {target}: not found")
        else:
            print(f"  {target}: {node.get_visible_name()} -> {node.get_url()}")


if __name__ == "__main__":
    run_demo()
