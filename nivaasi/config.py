from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from sqlalchemy import MetaData
from datetime import timedelta
import os
from dotenv import load_dotenv

load_dotenv()

metadata = MetaData(
    naming_convention={
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
    }
)

db = SQLAlchemy(metadata=metadata)
migrate = Migrate()
jwt = JWTManager()
bcrypt = Bcrypt()
cors = CORS()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'nivaasi-dev-secret-key-change-me-in-production')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES_HOURS', '1')))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv('JWT_REFRESH_TOKEN_EXPIRES_DAYS', '30')))

    # In-memory by default: state lives as long as the process
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite://')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    NIVAASI_ENV = os.getenv('NIVAASI_ENV', 'development')
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
    PORT = int(os.getenv('PORT', '8080'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    CONNECTION_CODE_TTL_DAYS = int(os.getenv('CONNECTION_CODE_TTL_DAYS', '7'))
    RENT_DUE_DAYS = int(os.getenv('RENT_DUE_DAYS', '30'))
