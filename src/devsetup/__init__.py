"""devsetup - Linux development workstation provisioning CLI

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Fail fast with helpful guidance

The devsetup CLI updates system packages, applies kernel tweaks for
development, installs Homebrew with a fixed set of CLI tools, installs
JetBrains IDEs via Flatpak and walks through GitHub SSH setup.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
