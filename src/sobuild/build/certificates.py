"""
Self-signed TLS material for development builds.

The key and certificate are minted by the external ``openssl`` tool through
the same process runner the compiler uses; the Diffie-Hellman parameters are
a fixed 2048-bit group written verbatim. None of this is fit for production.
"""

from pathlib import Path
from typing import List, Protocol, Sequence

from .errors import FilesystemError

DH2048_PEM = (
    "-----BEGIN DH PARAMETERS-----\n"
    "MIIBCAKCAQEAn4f4Qn5SudFjEYPWTbUaOTLUH85YWmmPFW1+b5bRa9ygr+1wfamv\n"
    "VKVT7jO8c4msSNikUf6eEfoH0H4VTCaj+Habwu+Sj+I416r3mliMD4SjNsUJrBrY\n"
    "Y0QV3ZUgZz4A8ARk/WwQcRl8+ZXJz34IaLwAcpyNhoV46iHVxW0ty8ND0U4DIku/\n"
    "PNayKimu4BXWXk4RfwNVP59t8DQKqjshZ4fDnbotskmSZ+e+FHrd+Kvrq/WButvV\n"
    "Bzy9fYgnUlJ82g/bziCI83R2xAdtH014fR63MpElkqdNeChb94pPbEdFlNUvYIBN\n"
    "xx2vTUQMqRbB4UdG2zuzzr5j98HDdblQ+wIBAg==\n"
    "-----END DH PARAMETERS-----"
)

CERT_VALIDITY_DAYS = 3000


class ProcessRunner(Protocol):
    def run(self, argv: Sequence[str]) -> object: ...


class CertificateGenerator:
    """Writes dh2048.pem and a self-signed key/certificate pair."""

    def __init__(self, runner: ProcessRunner, openssl: str = "openssl", show_progress: bool = True):
        """
        Args:
            runner: Object with a run(argv) method that raises on failure
            openssl: openssl executable
            show_progress: Print a line for each created file
        """
        self.runner = runner
        self.openssl = openssl
        self.show_progress = show_progress

    def __call__(self, app_name: str, root: Path) -> None:
        self.generate(app_name, root)

    def generate(self, app_name: str, root: Path) -> None:
        """Create the DH parameters, key and certificate for an application.

        Args:
            app_name: Application name, recorded in the certificate subject
            root: Application root; key and certificate land in root/cert
        """
        root = Path(root)
        dh_path = root / "dh2048.pem"
        try:
            dh_path.write_text(DH2048_PEM, encoding="ascii")
        except OSError as e:
            raise FilesystemError(f"open({dh_path}): {e.strerror or e}") from e
        if self.show_progress:
            print(f"created {dh_path}")

        self.runner.run(self.openssl_command(app_name, root))

    def openssl_command(self, app_name: str, root: Path) -> List[str]:
        cert_dir = Path(root) / "cert"
        return [
            self.openssl, "req", "-x509",
            "-newkey", "rsa:2048",
            "-nodes",
            "-sha256",
            "-days", str(CERT_VALIDITY_DAYS),
            "-subj", f"/C=SE/O=kore autogen: {app_name}/CN=localhost",
            "-keyout", str(cert_dir / "server.key"),
            "-out", str(cert_dir / "server.crt"),
        ]
