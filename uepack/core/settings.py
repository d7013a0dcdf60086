from PySide6.QtCore import QSettings

ORG = "uepack"
APP = "uepack"


class Settings:
    def __init__(self) -> None:
        self.s = QSettings(ORG, APP)

    def file_name(self) -> str:
        return self.s.fileName()

    # engine lookup
    def engine_root(self) -> str | None:
        """Return the engine install pinned by ``uepack config engine``."""
        return self.s.value("engine/root", None, type=str) or None

    def set_engine_root(self, path: str | None) -> None:
        if path is None:
            self.s.remove("engine/root")
        else:
            self.s.setValue("engine/root", path)

    def install_roots(self) -> list[str]:
        value = self.s.value("engine/install_roots", [])
        if isinstance(value, str):
            return [value] if value else []
        return [str(v) for v in value or []]

    def add_install_root(self, path: str) -> None:
        roots = self.install_roots()
        if path not in roots:
            roots.append(path)
        self.s.setValue("engine/install_roots", roots)

    def clear(self) -> None:
        self.s.remove("engine")
        self.s.sync()


settings = Settings()
