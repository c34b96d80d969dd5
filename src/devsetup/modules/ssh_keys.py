"""
SSH Key Manager Module

Generate the workstation's GitHub SSH key and load it into ssh-agent.

Security Requirements:
- Private key permissions: 0600 (read/write owner only)
- Public key permissions: 0644 (readable by all)
- SSH directory permissions: 0700 (owner only)
- Never log the private key
- Ed25519 keys

Generation always replaces an existing key pair at the target path.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from devsetup.errors import DevSetupError
from devsetup.modules.command_runner import CommandRunner, cmd

logger = logging.getLogger(__name__)

AGENT_VAR_PATTERN = re.compile(r"^(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);", re.MULTILINE)


@dataclass
class SSHKeyPair:
    """SSH key pair information."""

    private_path: Path
    public_path: Path
    public_key_content: str


class SSHKeyError(DevSetupError):
    """Raised when SSH key operations fail."""

    pass


def public_path_for(key_path: Path) -> Path:
    return key_path.with_suffix(key_path.suffix + ".pub")


class SSHKeyManager:
    """
    Generate SSH keys and register them with the agent.

    Security:
    - Private key: 0600 (-rw-------)
    - Public key: 0644 (-rw-r--r--)
    - SSH directory: 0700 (drwx------)
    """

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def generate_key(self, key_path: Path, comment: str) -> SSHKeyPair:
        """
        Generate a new Ed25519 key pair, replacing any existing one.

        Args:
            key_path: Path for the private key
            comment: Key comment (the operator's email)

        Returns:
            SSHKeyPair: Generated key pair

        Raises:
            CommandFailedError: If ssh-keygen fails
            SSHKeyError: If the public key cannot be read afterwards
        """
        key_path = Path(key_path).expanduser()
        public_path = public_path_for(key_path)

        self._ensure_ssh_directory(key_path.parent)

        # ssh-keygen would stop and ask before overwriting
        for existing in (key_path, public_path):
            if existing.exists():
                logger.debug(f"Replacing existing key file: {existing}")
                existing.unlink()

        self.runner.run(
            cmd("ssh-keygen", "-t", "ed25519", "-C", comment, "-f", str(key_path), "-N", "")
        )

        self._fix_permissions(key_path, public_path)

        return SSHKeyPair(
            private_path=key_path,
            public_path=public_path,
            public_key_content=self.read_public_key(key_path),
        )

    def add_to_agent(self, key_path: Path) -> None:
        """
        Start ssh-agent and add the key to it.

        The agent's socket and pid are exported to subsequent commands.

        Raises:
            CommandFailedError: If ssh-agent or ssh-add fails
        """
        result = self.runner.run(cmd("ssh-agent", "-s", capture=True))
        for name, value in AGENT_VAR_PATTERN.findall(result.stdout):
            self.runner.set_env(name, value)
            if name == "SSH_AGENT_PID":
                logger.info(f"Agent pid {value}")

        self.runner.run(cmd("ssh-add", str(key_path)))

    @staticmethod
    def _ensure_ssh_directory(ssh_dir: Path) -> None:
        """Ensure the SSH directory exists with mode 0700."""
        if not ssh_dir.exists():
            logger.debug(f"Creating SSH directory: {ssh_dir}")
            ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        elif ssh_dir.stat().st_mode & 0o077:
            logger.warning(f"Fixing SSH directory permissions: {ssh_dir}")
            ssh_dir.chmod(0o700)

    @staticmethod
    def _fix_permissions(private_path: Path, public_path: Path) -> None:
        if private_path.exists():
            private_path.chmod(0o600)
        if public_path.exists():
            public_path.chmod(0o644)

    @staticmethod
    def read_public_key(key_path: Path) -> str:
        """
        Read public key content.

        Raises:
            SSHKeyError: If public key not found or empty
        """
        public_path = public_path_for(Path(key_path).expanduser())

        if not public_path.exists():
            raise SSHKeyError(f"Public key not found: {public_path}")

        content = public_path.read_text().strip()
        if not content:
            raise SSHKeyError(f"Public key is empty: {public_path}")

        return content


__all__ = ["SSHKeyError", "SSHKeyManager", "SSHKeyPair", "public_path_for"]
