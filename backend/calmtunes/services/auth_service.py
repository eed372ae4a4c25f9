from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password, password_hash):
    return pwd_context.verify(plain_password, password_hash)


def hash_password(password):

    if not isinstance(password, (str, bytes)):
        raise TypeError("Password must be a string or bytes.")

    return pwd_context.hash(password)
