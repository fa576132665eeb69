import os
from dotenv import load_dotenv
load_dotenv()

print("GENIUS_KEY:", bool(os.getenv("GENIUS_KEY")))
print("GENIUS_BASE_URL:", os.getenv("GENIUS_BASE_URL", "https://api.genius.com"))
print("CACHE_BACKEND:", os.getenv("CACHE_BACKEND", "sqlite (config default)"))
print("CACHE_PATH:", os.getenv("CACHE_PATH", "data/cache/samplegraph.db (config default)"))
print("KEY_EXPIRY:", os.getenv("KEY_EXPIRY", "86400 (config default)"))
