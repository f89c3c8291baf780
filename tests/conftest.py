"""Shared pytest fixtures for Hero BG Studio tests."""

from __future__ import annotations

import random
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from herobg.core.adapters.gemini import GeminiImageAdapter
from herobg.core.adapters.offline import OfflinePreviewAdapter
from herobg.core.config import HeroBGConfig
from herobg.core.settings import GenerationMode, GenerationSettings, ImageBlob
from herobg.core.studio import HeroStudio

from helpers import inline_part, make_data_uri, make_image_bytes, make_response, text_part


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> HeroBGConfig:
    """Configuration isolated from the developer's environment and .env file.

    The credential sources point at a variable no real environment sets, so
    nothing leaks in from the shell running the tests.
    """
    return HeroBGConfig(
        _env_file=None,
        default_generator="offline",
        api_key=None,
        api_key_sources=["HEROBG_TEST_KEY"],
        history_limit=8,
    )


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def png_blob(png_bytes: bytes) -> ImageBlob:
    return ImageBlob(data=png_bytes, filename="person.png")


@pytest.fixture
def person_settings(png_blob: ImageBlob) -> GenerationSettings:
    """Person-mode settings with one subject photo."""
    return GenerationSettings(
        mode=GenerationMode.PERSON,
        person_images=[png_blob],
        visual_identity="Neon lime accents on matte black",
    )


@pytest.fixture
def mockup_settings(png_blob: ImageBlob) -> GenerationSettings:
    """Mockup-mode settings with a screenshot."""
    return GenerationSettings(mode=GenerationMode.MOCKUP, mockup_image=png_blob)


@pytest.fixture
def generated_png() -> bytes:
    """Bytes the stub client returns as the generated image."""
    return make_image_bytes(color=(10, 200, 90), size=(16, 9))


@pytest.fixture
def stub_client(generated_png: bytes) -> MagicMock:
    """Stand-in for ``genai.Client`` returning one inline image."""
    client = MagicMock()
    client.models.generate_content.return_value = make_response(
        text_part("Here is your image"), inline_part(generated_png)
    )
    return client


@pytest.fixture
def client_factory(stub_client: MagicMock) -> MagicMock:
    return MagicMock(return_value=stub_client)


@pytest.fixture
def gemini_adapter(test_config: HeroBGConfig, client_factory: MagicMock) -> GeminiImageAdapter:
    """Gemini adapter with a stubbed transport and a resolvable key."""
    return GeminiImageAdapter(
        test_config,
        client_factory=client_factory,
        environ={"HEROBG_TEST_KEY": "test-key"},
    )


@pytest.fixture
def offline_adapter(test_config: HeroBGConfig) -> OfflinePreviewAdapter:
    return OfflinePreviewAdapter(test_config, rng=random.Random(42))


@pytest.fixture
def offline_studio(test_config: HeroBGConfig, offline_adapter: OfflinePreviewAdapter) -> HeroStudio:
    return HeroStudio(test_config, adapter=offline_adapter)


@pytest.fixture
def test_client(offline_studio: HeroStudio):
    """FastAPI TestClient whose studio uses the offline preview adapter.

    The lifespan runs on entering the client; the studio it creates is then
    replaced so no test depends on the process environment.
    """
    from fastapi.testclient import TestClient

    from herobg.api.main import app

    with TestClient(app) as client:
        app.state.studio = offline_studio
        yield client


@pytest.fixture
def png_data_uri(png_bytes: bytes) -> str:
    return make_data_uri(png_bytes)
