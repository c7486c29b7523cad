from .main_window import MainWindow
from .installations_view import InstallationsView
from .installers_view import InstallersView
from .settings_widget import SettingsWidget

__all__ = ["MainWindow", "InstallationsView", "InstallersView", "SettingsWidget"]
