from .models import Cut, Installation, InstallationStatus, Installer, InstallerStats
from . import seed

__all__ = ["Cut", "Installation", "InstallationStatus", "Installer", "InstallerStats", "seed"]
