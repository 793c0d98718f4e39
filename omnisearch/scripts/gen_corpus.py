#!/usr/bin/env python3
"""
Synthetic snapshot generator for trying out the CLI.
Writes a JSON snapshot with workspaces, threads, messages, tasks and catalogs.
"""

import json
import random
from pathlib import Path

import click
from faker import Faker
from loguru import logger

fake = Faker()


class SnapshotGenerator:
    """Generate a workspace snapshot document."""

    FILE_DIRS = ["src", "src/components", "src/services", "tests", "docs", "scripts"]
    FILE_EXTS = [".py", ".ts", ".tsx", ".md", ".json"]
    PANELS = ["todo", "doing", "review", "done"]
    ROLES = ["user", "assistant"]
    OTHER_ITEM_KINDS = ["reasoning", "tool", "diff"]

    def __init__(self, seed: int = 0):
        random.seed(seed)
        Faker.seed(seed)

    def generate_workspace(self, index: int, files: int, threads: int) -> dict:
        workspace_id = f"ws-{index}"
        return {
            "workspaceId": workspace_id,
            "workspaceName": fake.company(),
            "files": [
                f"{random.choice(self.FILE_DIRS)}/{fake.word()}_{i}{random.choice(self.FILE_EXTS)}"
                for i in range(files)
            ],
            "threads": [
                {
                    "id": f"{workspace_id}-t{t}",
                    "name": fake.catch_phrase(),
                    "updatedAt": int(fake.date_time_this_year().timestamp() * 1000)
                }
                for t in range(threads)
            ],
        }

    def generate_items(self, thread_id: str, count: int) -> list:
        items = []
        for i in range(count):
            if random.random() < 0.2:
                items.append({"id": f"{thread_id}-x{i}", "kind": random.choice(self.OTHER_ITEM_KINDS)})
                continue
            items.append({
                "id": f"{thread_id}-m{i}",
                "kind": "message",
                "role": random.choice(self.ROLES),
                "text": fake.paragraph(nb_sentences=3),
            })
        return items

    def generate(self, workspaces: int, files: int, threads: int, messages: int) -> dict:
        sources = [self.generate_workspace(i, files, threads) for i in range(workspaces)]
        items_by_thread = {
            thread["id"]: self.generate_items(thread["id"], messages)
            for source in sources
            for thread in source["threads"]
        }
        tasks = [
            {
                "id": f"task-{i}",
                "workspaceId": random.choice(sources)["workspaceId"],
                "panelId": random.choice(self.PANELS),
                "title": fake.sentence(nb_words=5).rstrip("."),
                "description": fake.sentence(nb_words=12),
            }
            for i in range(workspaces * 10)
        ]
        return {
            "activeWorkspaceId": sources[0]["workspaceId"] if sources else None,
            "workspaces": sources,
            "threadItemsByThread": items_by_thread,
            "kanbanTasks": tasks,
            "historyItems": [
                {"text": fake.sentence(), "importance": random.randint(0, 30)}
                for _ in range(50)
            ],
            "skills": [
                {"name": fake.slug(), "path": f"/skills/{i}", "description": fake.bs()}
                for i in range(15)
            ],
            "commands": [
                {"name": fake.word(), "path": f"/commands/{i}", "description": fake.bs(),
                 "argumentHint": "<target>"}
                for i in range(15)
            ],
        }


@click.command()
@click.option("--out", type=click.Path(path_type=Path), required=True, help="Output JSON path")
@click.option("--workspaces", default=3, help="Number of workspaces")
@click.option("--files", default=200, help="Files per workspace")
@click.option("--threads", default=20, help="Threads per workspace")
@click.option("--messages", default=12, help="Items per thread")
@click.option("--seed", default=0, help="Random seed")
def main(out: Path, workspaces: int, files: int, threads: int, messages: int, seed: int):
    """Generate a synthetic snapshot."""
    generator = SnapshotGenerator(seed)
    snapshot = generator.generate(workspaces, files, threads, messages)

    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, 'w') as f:
        json.dump(snapshot, f, indent=2)

    logger.success(f"Snapshot written to {out}")


if __name__ == "__main__":
    main()
