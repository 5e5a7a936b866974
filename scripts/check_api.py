import os
import sys

import openai
from dotenv import load_dotenv


def check_openai_speech(api_key: str) -> bool:
    try:
        client = openai.OpenAI(api_key=api_key)
        response = client.audio.speech.create(
            model="tts-1", voice="alloy", input="rocket", response_format="mp3"
        )
        print(f"✅ OpenAI speech synthesis successful ({len(response.content)} bytes)")
        return True
    except openai.OpenAIError as e:
        print(f"❌ OpenAI speech synthesis failed: {e}")
        return False


def main():
    load_dotenv()

    api_key = os.getenv("OPENAI_API_KEY")

    print("--- Checking Speech API ---")

    if not api_key:
        print("\nSkipping OpenAI speech check: OPENAI_API_KEY not found in .env")
        sys.exit(1)

    if not check_openai_speech(api_key):
        sys.exit(1)


if __name__ == "__main__":
    main()
