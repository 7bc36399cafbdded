import ftplib
from contextlib import contextmanager
from typing import Iterator

from zanders.config import ZandersConfig
from zanders.exceptions import NotAuthenticated
from zanders.models import Credentials
from zanders.logger import get_logger

log = get_logger("ftp")


class FtpSession:
    def __init__(self, ftp: ftplib.FTP):
        self._ftp = ftp

    def chdir(self, path: str) -> None:
        self._ftp.cwd(path)

    def getbinaryfile(self, remote_name: str, local_path: str) -> None:
        with open(local_path, "wb") as fh:
            self._ftp.retrbinary(f"RETR {remote_name}", fh.write)
        log.info(f"Downloaded {remote_name} -> {local_path}")

    def close(self) -> None:
        self._ftp.close()


@contextmanager
def connect(config: ZandersConfig, credentials: Credentials) -> Iterator[FtpSession]:
    """Open an FTP session on the configured host; always closed on exit."""
    ftp = ftplib.FTP(config.ftp_host)
    session = FtpSession(ftp)
    try:
        try:
            ftp.login(credentials.username, credentials.password)
        except ftplib.error_perm as e:
            log.warning(f"FTP login rejected for {credentials.username}: {e}")
            raise NotAuthenticated(str(e)) from e

        ftp.set_pasv(True)
        yield session
    finally:
        session.close()
