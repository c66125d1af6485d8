import uvicorn
from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

if __name__ == "__main__":
    print("\n🚀 Starting Saga TTS API...")
    print("📍 Server will be available at: http://localhost:8000")
    print("   Health check: http://localhost:8000/health\n")

    # Verify the key for the configured provider is loaded
    provider = os.getenv("TTS_PROVIDER", "openai").strip().lower()
    key_name = "DEEPGRAM_API_KEY" if provider == "deepgram" else "OPENAI_API_KEY"
    if os.getenv(key_name):
        print(f"✅ {key_name} loaded successfully")
    else:
        print(f"⚠️  WARNING: {key_name} not found in environment")

    uvicorn.run("saga_tts.main:app", host="0.0.0.0", port=8000, reload=True)
