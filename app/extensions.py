# app/extensions.py
from flask_cors import CORS

from .storage.user_store import UserStore

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

# Bound to Config.USERS_FILE by create_app()
store = UserStore()
