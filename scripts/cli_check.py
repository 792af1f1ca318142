# /scripts/cli_check.py
from __future__ import annotations
import argparse, json, sys, time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clients.medassist_client import MedAssistClient

def print_step(title):
    print(f"\n=== {title} ===")

def pretty(o, indent=2):
    return json.dumps(o, indent=indent, ensure_ascii=False)

def do_seed(cli: MedAssistClient, path: str):
    """Seed from a JSON list of {name, quantity_in_stock, price, ...}."""
    print_step(f"SEED POST /api/medicines <- {path}")
    with open(path, "r", encoding="utf-8") as f:
        items = json.load(f)
    added = skipped = 0
    for it in items:
        out = cli.add_medication(**it)
        if out.get("http_status") == 400:
            skipped += 1
            print(f"  skip: {out.get('error')}")
        else:
            added += 1
            print(f"  ok:   {out.get('msg')}")
    print(f"added={added} skipped={skipped}")

def do_check(cli: MedAssistClient, name: str, model: str | None):
    print_step(f"CHECK /api/medicines/check name={name!r}")
    t0 = time.perf_counter()
    data = cli.check(name, model=model)
    dt = (time.perf_counter() - t0) * 1000
    print(f"done in {dt:.0f} ms")
    print("status :", data.get("status"))
    print("message:", data.get("message") or data.get("error"))
    if data.get("data"):
        rec = data["data"]
        print("matched:", rec.get("name"), "| stock:", rec.get("quantity_in_stock"), "| price:", rec.get("price"))
    if data.get("suggestions") is not None:
        print("suggestions:", ", ".join(data["suggestions"]) or "-")
    if data.get("degraded"):
        print("NOTE: substitutes came from the fallback list (suggestion service was rate limited)")
    if data.get("disclaimer"):
        print(data["disclaimer"])
    return data

def main():
    ap = argparse.ArgumentParser(description="MedAssist flow check: seed inventory and run availability checks.")
    ap.add_argument("--base", default="http://127.0.0.1:8000", help="Base URL of the API")
    ap.add_argument("--seed", help="JSON file with medications to add first")
    ap.add_argument("--model", default=None, help="Suggestion-service model id")
    ap.add_argument("--json", action="store_true", help="Print the raw JSON responses")
    ap.add_argument("names", nargs="*", help="Medicine names to check")
    args = ap.parse_args()

    cli = MedAssistClient(args.base)
    print_step("READY /readyz")
    print(pretty(cli.health()))

    if args.seed:
        do_seed(cli, args.seed)
    for name in args.names:
        data = do_check(cli, name, args.model)
        if args.json:
            print(pretty(data))

if __name__ == "__main__":
    main()
