"""Unit tests for the generator adapter registry."""

from __future__ import annotations

import logging

import pytest

from herobg.core.generator_adapters import (
    GeneratorAdapterBase,
    GeneratorRegistry,
    generator_registry,
)
from herobg.core.settings import GeneratedImage


class EchoAdapter(GeneratorAdapterBase):
    """Minimal adapter returning the prompt as the image reference."""

    name = "echo"
    description = "Echo adapter for tests"

    def __init__(self, config, suffix=""):
        super().__init__(config)
        self.suffix = suffix

    def generate(self, settings, prompt):
        return GeneratedImage(image_url=f"echo:{prompt}{self.suffix}", prompt=prompt)


class TestGeneratorRegistry:
    def test_builtin_adapters_registered(self):
        available = generator_registry.list_available()
        assert "gemini" in available
        assert "offline" in available

    def test_register_returns_class(self):
        registry = GeneratorRegistry()
        assert registry.register(EchoAdapter) is EchoAdapter
        assert registry.get_adapter_class("echo") is EchoAdapter

    def test_register_overwrite_warns(self, caplog):
        registry = GeneratorRegistry()
        registry.register(EchoAdapter)
        with caplog.at_level(logging.WARNING):
            registry.register(EchoAdapter)
        assert "already registered" in caplog.text

    def test_instantiate_passes_kwargs(self, test_config):
        registry = GeneratorRegistry()
        registry.register(EchoAdapter)

        adapter = registry.instantiate("echo", test_config, suffix="!")

        assert adapter.config is test_config
        assert adapter.generate(None, "hi").image_url == "echo:hi!"

    def test_instantiate_unknown(self, test_config):
        registry = GeneratorRegistry()
        registry.register(EchoAdapter)
        with pytest.raises(KeyError, match="Available adapters: echo"):
            registry.instantiate("missing", test_config)

    def test_adapter_info(self):
        registry = GeneratorRegistry()
        registry.register(EchoAdapter)
        assert registry.get_adapter_info("echo") == {
            "name": "echo",
            "description": "Echo adapter for tests",
            "requires_credentials": False,
            "version": "0.1.0",
        }
        assert registry.get_adapter_info("missing") is None

    def test_base_class_is_abstract(self, test_config):
        with pytest.raises(TypeError):
            GeneratorAdapterBase(test_config)
