import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def taichi_cpu():
    """Initialise Taichi once on the CPU backend for the whole test session."""
    ti.init(arch=ti.cpu)
    yield
