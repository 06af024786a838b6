#!/usr/bin/env python3
"""
Basic usage example for etcd2-client.

This example demonstrates:
1. Creating a client from EtcdSettings__* environment variables
2. Writing, reading and deleting keys and directories
3. Handling etcd errors

Run it against a local, disposable etcd v2 server:
    EtcdSettings__HostName=http://127.0.0.1:2379 python examples/basic_usage.py
"""

import os

from etcd2_client import EtcdClient, EtcdHTTPError, setup_logging

setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))

DEMO_DIR = "/etcd2_client_demo"


def main():
    with EtcdClient.from_env(failover=False) as client:
        print(f"🔗 Etcd endpoint: {client.base_url}")
        print(f"📦 Version: {client.get_version().raw}")

        client.mkdir(DEMO_DIR)
        client.set(f"{DEMO_DIR}/greeting", "hello")
        client.set(f"{DEMO_DIR}/ephemeral", "bye", ttl=5)

        print("📋 Directory contents:")
        for node in client.ls(DEMO_DIR).get("nodes"):
            ttl = node.get("ttl")
            suffix = f" (ttl {ttl.as_int()}s)" if not ttl.is_null() else ""
            print(f"  {node['key'].as_str()} = {node['value'].as_str()}{suffix}")

        try:
            client.create(f"{DEMO_DIR}/greeting", "again")
        except EtcdHTTPError as e:
            print(f"❌ create refused as expected: {e} (errorCode {e.error_code})")

        try:
            client.rmdir(DEMO_DIR)
        except EtcdHTTPError as e:
            print(f"❌ rmdir refused as expected: {e}")

        client.rmdir(DEMO_DIR, recursive=True)
        print("🧹 Cleaned up")


if __name__ == "__main__":
    main()
