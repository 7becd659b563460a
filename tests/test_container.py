from conftest import FakeBridge, FakeSurface

from mdsource.di.container import Container
from mdsource.domain.models import Patched
from mdsource.services.config.app_config import AppConfig
from mdsource.services.settings_service import MemorySettingsStore, QSettingsStore


class _Ini:
    def app_version(self):
        return "0.0.0"

    def get(self, section, key, default=None):
        return {("source", "width"): "1024"}.get((section, key), default)

    def get_int(self, section, key, default=None):
        raw = self.get(section, key)
        return int(raw) if raw is not None else default

    @property
    def loaded_from(self):
        return None


def test_container_wires_default_services(qsettings, tmp_path):
    c = Container(qsettings=qsettings, config=AppConfig(ini=_Ini(), project_root=tmp_path))
    assert c.renderer is not None
    assert c.styles is not None
    assert c.assembler is not None
    assert c.file_service is not None
    assert isinstance(c.store, QSettingsStore)


def test_container_builds_working_source(tmp_path):
    store = MemorySettingsStore()
    c = Container(store=store, config=AppConfig(ini=_Ini(), project_root=tmp_path))
    surface = FakeSurface(FakeBridge())

    source = c.build_source(surface)
    try:
        result = source.create({"markdown/text": "# Hi"}, start_watcher=False)
    finally:
        source.destroy()

    assert isinstance(result, Patched)
    assert "<h1>Hi</h1>" in result.html_fragment
    # ini override reached the seeded defaults
    assert store.get("surface/width") == 1024
    assert surface.resizes == [(1024, 600)]
