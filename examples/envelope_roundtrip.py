"""
Simple end-to-end SmartQR roundtrip example.

This simulates:

1. A user generating a password-protected WiFi QR code.
2. A scanner recovering the text and classifying it.
3. The user unlocking the protected payload.

No image is drawn or read here: the rendered locator is only printed, and
the "scan" feeds the generated text straight back into the classifier.
"""

from smartqr.protocol import generate, reveal, scan_generated


def main() -> None:
    # 1. Generate a protected WiFi code
    item = generate(
        "wifi",
        {"ssid": "Cafe Guest", "password": "espresso", "security": "WPA2"},
        password="barista",
    )
    print("Preview:", item.content)
    print("Encoded text:", item.full_content)
    print("Image URL:", item.qr_url)
    print()

    # 2. Scan it back
    result = scan_generated(item)
    print("Scan result:", result.to_dict())
    print()

    # 3. Unlock with the wrong, then the right password
    print("Wrong password:", reveal(result, "latte"))
    unlocked = reveal(result, "barista")
    if unlocked is not None:
        print("Unlocked:", unlocked.to_dict())
        print("✅ Connect to", unlocked.ssid)
    else:
        print("❌ Could not unlock")


if __name__ == "__main__":
    main()
