"""Tests for the async search session."""

import asyncio
import threading

import pytest

from omnisearch.engine.models import WorkspaceSource
from omnisearch.engine.search import SearchParams, compute_search_results
from omnisearch.engine.session import SearchSession


def make_params(query: str) -> SearchParams:
    return SearchParams(
        query=query,
        workspace_sources=[WorkspaceSource("w", files=["alpha.py", "beta.py"])],
    )


@pytest.mark.asyncio
async def test_submit_publishes_results():
    """A lone submission publishes its results."""
    published = []
    session = SearchSession(on_results=lambda params, results: published.append(params.query))

    results = await session.submit(make_params("alpha"))

    assert [r.file_path for r in results] == ["alpha.py"]
    assert session.results == results
    assert session.published_generation == 1
    assert published == ["alpha"]


@pytest.mark.asyncio
async def test_stale_results_are_discarded():
    """A slow older query finishing last never overwrites a newer one."""
    release_slow = threading.Event()

    def search_fn(params, config, metrics):
        if params.query == "alpha":
            release_slow.wait(timeout=5)
        return compute_search_results(params, config, metrics)

    session = SearchSession(search_fn=search_fn)

    slow = asyncio.create_task(session.submit(make_params("alpha")))
    await asyncio.sleep(0.05)
    fast_results = await session.submit(make_params("beta"))
    release_slow.set()
    slow_results = await slow

    assert slow_results is None
    assert [r.file_path for r in fast_results] == ["beta.py"]
    assert [r.file_path for r in session.results] == ["beta.py"]
    assert session.stale_discarded == 1
    assert session.generation == 2
    assert session.published_generation == 2
