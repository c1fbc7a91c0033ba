"""
Pytest configuration and shared fixtures for the style match service tests.
"""
import os
import sys
from typing import Dict, List
from unittest.mock import MagicMock

import pytest

# Add src (and this directory, for fakes) to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))
sys.path.insert(0, os.path.dirname(__file__))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

from fakes import FakeEmbedder, make_raw_pin  # noqa: E402


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def sample_raw_pins() -> List[Dict]:
    return [
        make_raw_pin("p1", "Boho linen summer dress", "Flowy linen with floral trim"),
        make_raw_pin("p2", "Floral boho maxi", "linen layers for summer"),
        make_raw_pin("p3", "😍😍😍", None),
        make_raw_pin("p4", "12345", "2024/05"),
        make_raw_pin("p5", "new design", None),
    ]


@pytest.fixture
def sample_products() -> List[Dict]:
    return [
        {"id": "sku-1", "name": "Linen Wrap Dress", "brand": "Sunday", "category": "dresses",
         "tags": ["boho", "linen", "floral"], "price": 89.0, "productUrl": "https://shop.example.com/1",
         "imageUrl": "https://img.example.com/1.jpg"},
        {"id": "sku-2", "name": "Leather Moto Jacket", "brand": "Rider", "category": "outerwear",
         "tags": ["leather", "edgy"], "price": 240.0, "productUrl": "https://shop.example.com/2",
         "imageUrl": "https://img.example.com/2.jpg"},
        {"id": "sku-3", "name": "Denim Straight Jeans", "brand": "Blue", "category": "bottoms",
         "tags": ["denim"], "price": 70.0, "productUrl": "https://shop.example.com/3",
         "imageUrl": "https://img.example.com/3.jpg"},
        {"id": "sku-4", "name": "Floral Boho Blouse", "brand": "Sunday", "category": "tops",
         "tags": ["boho", "floral"], "price": 45.0, "productUrl": "https://shop.example.com/4",
         "imageUrl": "https://img.example.com/4.jpg"},
    ]


# ============================================================================
# Fixtures: Services
# ============================================================================

@pytest.fixture
def test_settings(tmp_path):
    from config.settings import get_settings_for_testing
    return get_settings_for_testing(data_dir=tmp_path / "data")


@pytest.fixture
def memory_store():
    from stylematch.store import InMemoryDocumentStore
    return InMemoryDocumentStore()


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def mock_pinterest_client():
    """Pinterest client double; tests set list_board_pins / list_boards behavior."""
    return MagicMock()


@pytest.fixture
def provider_session():
    from stylematch.session import ProviderSession
    return ProviderSession()


@pytest.fixture
def container(test_settings, memory_store, mock_pinterest_client, fake_embedder, provider_session):
    from api.dependencies import build_container
    return build_container(
        test_settings,
        store=memory_store,
        pinterest_client=mock_pinterest_client,
        embedder=fake_embedder,
        session=provider_session,
    )


@pytest.fixture
def client(container):
    """FastAPI TestClient over an app wired with in-memory fakes."""
    from fastapi.testclient import TestClient
    from api.app import create_app

    with TestClient(create_app(container=container)) as test_client:
        yield test_client


# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests unless a real OpenAI key is configured."""
    skip_integration = pytest.mark.skip(reason="Integration tests require OPENAI_API_KEY")
    if os.getenv("OPENAI_API_KEY"):
        return
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
