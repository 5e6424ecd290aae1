# main.py
import json

from api.api import classify_email, classify_url, normalize_url
from config import configure_logging


def print_json(obj):
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _analyze_url():
    url = input("URL: ")
    if not url.strip():
        print("A URL is required.")
        return
    print_json(classify_url(normalize_url(url)).to_response())


def _analyze_email():
    subject = input("Subject: ")
    sender = input("Sender: ")
    print("Content (finish with an empty line):")
    lines = []
    while True:
        line = input()
        if line == "":
            break
        lines.append(line)
    content = "\n".join(lines)
    if not subject or not content or not sender:
        print("Subject, content, and sender are required.")
        return
    print_json(classify_email(subject, content, sender).to_response())


def main_loop():
    print("Phishing / Spam Detection Tool - heuristic demo\n")
    while True:
        try:
            kind = input("Analyze [u]rl or [e]mail (press Enter to exit): ").strip().lower()
            if kind == "":
                break
            if kind in ("u", "url"):
                _analyze_url()
            elif kind in ("e", "email"):
                _analyze_email()
            else:
                print("Please answer 'u' or 'e'.")
        except (KeyboardInterrupt, EOFError):
            break


if __name__ == "__main__":
    configure_logging()
    main_loop()
