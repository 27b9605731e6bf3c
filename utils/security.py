"""
Recipe Catalog Security Utilities
Password hashing helpers
"""

import bcrypt


class SecurityUtils:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # bcrypt only considers the first 72 bytes of a password
        self.password_max_bytes = 72

    def hash_password(self, password: str) -> str:
        """Hash password using bcrypt"""
        encoded = password.encode('utf-8')
        if len(encoded) > self.password_max_bytes:
            raise ValueError(f"Password must be at most {self.password_max_bytes} bytes")

        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(encoded, salt)
        return hashed.decode('utf-8')

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify password against bcrypt hash"""
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
        except (ValueError, TypeError):
            return False
