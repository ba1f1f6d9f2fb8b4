import os
import secrets


def generate_secret_key() -> str:
    print("Generating mock server signing secret (HS256)...")
    return secrets.token_urlsafe(48)


def setup_env():
    if os.path.exists(".env"):
        response = input("A .env file already exists. Overwrite it? (y/N): ")
        if response.lower() != 'y':
            print("Aborted.")
            return

    if not os.path.exists(".env.example"):
        print("Error: .env.example not found.")
        return

    print("Reading .env.example...")
    with open(".env.example", "r", encoding="utf-8") as f:
        env_content = f.read()

    secret_key = generate_secret_key()

    new_lines = []
    for line in env_content.splitlines():
        if line.startswith("MOCK_SECRET_KEY="):
            new_lines.append(f'MOCK_SECRET_KEY="{secret_key}"')
        else:
            new_lines.append(line)

    with open(".env", "w", encoding="utf-8") as f:
        f.write("\n".join(new_lines))
        f.write("\n") # Ensure trailing newline

    print("SUCCESS: .env file created with a new signing secret.")

if __name__ == "__main__":
    setup_env()
