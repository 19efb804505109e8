"""
Basic Twitter REST Client Usage

Demonstrates GET/POST requests, media upload, error handling and rate limits.
Credentials are read from TWITTER_CONSUMER_KEY, TWITTER_CONSUMER_SECRET,
TWITTER_OAUTH_TOKEN and TWITTER_OAUTH_TOKEN_SECRET.
"""

import sys

from twitter_rest import Client, NotFound, TooManyRequests, TwitterError


def home_timeline(client):
    """GET с query параметрами."""
    print("\n=== Home Timeline ===")

    response = client.get("/1.1/statuses/home_timeline.json", {"count": 5, "trim_user": True})

    for tweet in response.parsed or []:
        print(f"- {tweet.get('text')}")


def post_status(client):
    """POST: params уходят в x-www-form-urlencoded тело."""
    print("\n=== Post Status ===")

    response = client.post("/1.1/statuses/update.json", {"status": "Hello from Python!"})
    print(f"Created: {response.parsed.get('id')}")


def upload_media(client, path):
    """Загрузка файла: MultipartWithFile + Multipart кодируют тело."""
    print("\n=== Upload Media ===")

    with open(path, "rb") as media:
        response = client.upload("/1.1/media/upload.json", {"media": media})

    print(f"Media ID: {response.parsed.get('media_id_string')}")


def error_handling(client):
    """Ошибки классифицируются middleware."""
    print("\n=== Error Handling ===")

    try:
        client.get("/1.1/users/show.json", {"screen_name": "this_user_does_not_exist_42"})
    except NotFound as e:
        print(f"Not found: {e.message} (status {e.status_code})")
    except TooManyRequests as e:
        print(f"Rate limited, reset in {e.rate_limit.reset_in()}s")
    except TwitterError as e:
        print(f"Request failed: {e} (retryable={e.retryable})")


def show_rate_limit(client):
    """Последнее наблюдение x-rate-limit-* заголовков."""
    print("\n=== Rate Limit ===")

    status = client.rate_limit
    print(f"Limit: {status.limit}, remaining: {status.remaining}, reset at: {status.reset_at}")


if __name__ == "__main__":
    print("Twitter REST Client - Basic Usage")
    print("=" * 50)

    with Client() as client:
        if not client.has_credentials():
            print("Set TWITTER_* environment variables first")
            sys.exit(1)

        home_timeline(client)
        error_handling(client)
        show_rate_limit(client)

        if len(sys.argv) > 1:
            post_status(client)
            upload_media(client, sys.argv[1])
