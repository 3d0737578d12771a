"""Download the classifier models into the model directory."""

from pathlib import Path

import httpx
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from moodbites.config import MODEL_BASE_URL, MODEL_DIR, MODEL_FILES


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, max=10),
    retry=retry_if_exception_type(httpx.TimeoutException),
)
def _download(client: httpx.Client, url: str, dest: Path) -> int:
    """Download one file and return its size in bytes."""
    resp = client.get(url)
    resp.raise_for_status()
    # Write to a temporary name so an interrupted download is never mistaken for a model
    tmp = dest.with_suffix(dest.suffix + ".part")
    tmp.write_bytes(resp.content)
    tmp.replace(dest)
    return len(resp.content)


def main() -> None:
    if not MODEL_BASE_URL:
        print("Error: MOODBITES_MODEL_BASE_URL not set in .env")
        return

    MODEL_DIR.mkdir(parents=True, exist_ok=True)
    pending = {name: f for name, f in MODEL_FILES.items() if not (MODEL_DIR / f).exists()}
    if not pending:
        print(f"All models already present in {MODEL_DIR}")
        return

    base_url = MODEL_BASE_URL.rstrip("/")
    with (
        httpx.Client(timeout=60.0, follow_redirects=True) as client,
        Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
        ) as progress,
    ):
        task = progress.add_task("Downloading models", total=len(pending))
        for name, filename in pending.items():
            size = _download(client, f"{base_url}/{filename}", MODEL_DIR / filename)
            progress.console.print(f"{name}: {filename} ({size / 1e6:.1f} MB)")
            progress.advance(task)

    print(f"Done. Models saved to {MODEL_DIR}")


if __name__ == "__main__":
    main()
