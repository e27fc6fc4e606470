import os
from dotenv import load_dotenv

load_dotenv()

# Route every Firestore call to MockFirestore before any module asks for a client
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("CLIENT_ORIGIN_URL", "*")
