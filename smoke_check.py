#!/usr/bin/env python3
"""Smoke check against a running deployment: BASE_URL=http://host:8080 python smoke_check.py"""
import os, sys, requests

BASE_URL = os.environ.get("BASE_URL", "http://localhost:8080")

NODES = [{"id": "A", "name": "A"}, {"id": "B", "name": "B"}]
EDGES = [{"source": "A", "target": "B"}]

def must(cond, msg):
    if not cond:
        print("❌", msg); sys.exit(1)
    print("✅", msg)

def main():
    r = requests.get(f"{BASE_URL}/health", timeout=10)
    must(r.status_code == 200, "health 200")

    r = requests.get(f"{BASE_URL}/openapi.json", timeout=10)
    must(r.ok and "paths" in r.json(), "openapi ok")

    r = requests.post(f"{BASE_URL}/v1/network", json={"nodes": NODES, "edges": EDGES}, timeout=30)
    must(r.ok, "network 200")
    data = r.json()
    must(data.get("node_count") == 2 and data.get("edge_count") == 1, "network counts 2/1")
    must("id:'A'" in data["nodes"] and "targetShape:'triangle'" in data["edges"], "elements carry defaults")

    r = requests.post(f"{BASE_URL}/v1/network", json={"nodes": [], "edges": EDGES}, timeout=30)
    must(r.status_code == 422 and r.json().get("reason") == "no_nodes", "empty nodes -> 422")

    r = requests.post(
        f"{BASE_URL}/v1/network/html",
        json={"nodes": NODES, "edges": EDGES, "stand_alone": False},
        timeout=30,
    )
    must(r.ok and "<html" not in r.text and "cytoscape(" in r.text, "fragment without <html>")

    r = requests.get(f"{BASE_URL}/v1/network/example", timeout=30)
    must(r.ok and "<html>" in r.text and "id:'Kramer'" in r.text, "example document")

    print(f"🎉 Smoke OK against {BASE_URL}")

if __name__ == "__main__":
    main()
