from zanders.exceptions import NotAuthenticated
from zanders.services.base import FtpService


class User(FtpService):

    def authenticated(self) -> bool:
        try:
            with self.connect():
                return True
        except NotAuthenticated:
            return False
