"""Example usage of the jsondiffer comparison engine."""

import json

from jsondiffer import (
    CompareOptions,
    EngineConfig,
    JsonDiffEngine,
    PathPattern,
    format_result,
)

# Old API response (legacy system)
old_text = """{
  "id": "INV-001",
  "status": "PAID",
  "updatedAt": "2025-02-02T11:00:00Z",
  "metadata": {"traceId": "abc123"},
  "tags": ["billing", "eu", "priority"],
  "lineItems": [
    {"id": "WIDGET-001", "quantity": 5, "unitPrice": 10.00},
    {"id": "GADGET-002", "quantity": 2, "unitPrice": 25.50}
  ]
}"""

# New API response (new system)
new_text = """{
  "id": "INV-001",
  "status": "paid",
  "updatedAt": "2025-02-02T11:00:04Z",
  "metadata": {"traceId": "def456"},
  "tags": ["eu", "priority", "billing"],
  "lineItems": [
    {"id": "GADGET-002", "quantity": 3, "unitPrice": 25.50},
    {"id": "WIDGET-001", "quantity": 5, "unitPrice": 10.00}
  ],
  "currency": "EUR"
}"""


def main():
    print("=" * 60)
    print("jsondiffer - Example")
    print("=" * 60)

    # Create engine with default config
    engine = JsonDiffEngine()

    result = engine.compare_texts(old_text, new_text, left_name="old.json", right_name="new.json")

    print(f"\nIdentical: {result.is_identical}")
    print(f"\nSummary:")
    for diff_type, count in result.count_by_type().items():
        if count:
            print(f"  {diff_type.readable_text}: {count}")

    print(f"\nDifferences:")
    print(format_result(result))


def example_with_options():
    """Example with ignored paths and unordered arrays."""
    print("\n" + "=" * 60)
    print("Example with Options")
    print("=" * 60)

    options = CompareOptions(
        ignore_patterns=[
            "$.updatedAt",
            PathPattern.regex(r"^\$\.metadata\."),
        ],
        unordered_array_patterns=[
            "$.tags",
            PathPattern.wildcard("$.lineItems"),
        ],
        show_nested_differences=True,
    )

    result = JsonDiffEngine().compare_texts(old_text, new_text, options)

    print(format_result(result, readable=False))

    print("-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict(), indent=2))


def example_without_lines():
    """Example comparing parsed values without source text."""
    print("\n" + "=" * 60)
    print("Example without Line Numbers")
    print("=" * 60)

    config = EngineConfig(sort_entries=False)
    engine = JsonDiffEngine(config)

    result = engine.compare(json.loads(old_text), json.loads(new_text))

    for entry in result.entries:
        print(f"  - [{entry.type.readable_text}] {entry.path}")
        print(f"    {entry.type.description}")


if __name__ == "__main__":
    main()
    example_with_options()
    example_without_lines()
