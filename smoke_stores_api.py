#!/usr/bin/env python3
"""
Smoke test for a running Stores API instance (JSON and XML round trips)
"""

import os
import sys
import xml.etree.ElementTree as ET

import requests

# Configuration
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:3000")
XML_HEADERS = {"Content-Type": "application/xml", "Accept": "application/xml"}


def smoke_json_crud():
    """Create, read, update and delete a store using JSON"""

    print("🏪 Testing Stores API (JSON)")
    print("=" * 60)

    print("\n1. Creating store...")
    try:
        response = requests.post(f"{BACKEND_URL}/stores", json={"name": "Acme", "address": "1 Main St"})
        if response.status_code != 201:
            print(f"❌ Failed to create store: {response.status_code} {response.text}")
            return False
        store = response.json()
        print(f"✅ Store created: id={store['id']}")
    except requests.RequestException as e:
        print(f"❌ Error creating store: {e}")
        return False

    print("\n2. Updating phone...")
    response = requests.put(f"{BACKEND_URL}/stores/{store['id']}", json={"phone": "555-1234"})
    if response.status_code != 200 or response.json()["phone"] != "555-1234":
        print(f"❌ Failed to update store: {response.status_code} {response.text}")
        return False
    print(f"✅ Store updated at {response.json()['updated_at']}")

    print("\n3. Deleting store...")
    response = requests.delete(f"{BACKEND_URL}/stores/{store['id']}")
    if response.status_code != 200:
        print(f"❌ Failed to delete store: {response.status_code}")
        return False
    print(f"✅ {response.json()['message']}")

    print("\n4. Confirming it is gone...")
    response = requests.get(f"{BACKEND_URL}/stores/{store['id']}")
    if response.status_code != 404:
        print(f"❌ Expected 404, got {response.status_code}")
        return False
    print("✅ Store not found, as expected")
    return True


def smoke_xml_crud():
    """Same flow with XML bodies and XML responses"""

    print("\n🧾 Testing Stores API (XML)")
    print("=" * 60)

    body = "<store><name>Acme XML</name><address>2 Side St</address></store>"
    response = requests.post(f"{BACKEND_URL}/stores", data=body, headers=XML_HEADERS)
    if response.status_code != 201:
        print(f"❌ Failed to create store: {response.status_code} {response.text}")
        return False
    store_id = ET.fromstring(response.content).findtext("id")
    print(f"✅ Store created from XML: id={store_id}")

    response = requests.get(f"{BACKEND_URL}/stores", headers={"Accept": "application/xml"})
    root = ET.fromstring(response.content)
    print(f"✅ Listed {len(root.findall('store'))} store(s) under <{root.tag}>")

    requests.delete(f"{BACKEND_URL}/stores/{store_id}")
    return True


if __name__ == "__main__":
    ok = smoke_json_crud() and smoke_xml_crud()
    print("\n🎉 Smoke test passed" if ok else "\n💥 Smoke test failed")
    sys.exit(0 if ok else 1)
