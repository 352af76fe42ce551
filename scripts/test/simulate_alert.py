# scripts/test/simulate_alert.py
"""Send test alerts to a running backend: panic press, alert (optionally with photo), feedback."""

import argparse
import requests

BACKEND_URL = "http://localhost:3004"


def simulate_panic(user_id, lat, lon):
    resp = requests.post(f"{BACKEND_URL}/trigger-panic-button",
                         json={"id_usuario": user_id, "latitud": lat, "longitud": lon}, timeout=10)
    print(f"✅ panic user={user_id} → HTTP {resp.status_code}: {resp.json()}")


def simulate_alert(user_id, type_id, message, lat, lon, photo_path=None):
    data = {"id_usuario": user_id, "id_tipo": type_id, "mensaje": message, "latitud": lat, "longitud": lon}
    files = None
    if photo_path:
        files = {"foto": (photo_path.rsplit("/", 1)[-1], open(photo_path, "rb"), "image/jpeg")}
    try:
        resp = requests.post(f"{BACKEND_URL}/send-alert", data=data, files=files, timeout=30)
    finally:
        if files:
            files["foto"][1].close()
    print(f"✅ alert type={type_id} photo={'yes' if photo_path else 'no'} → HTTP {resp.status_code}: {resp.json()}")


def simulate_feedback(alert_id, feedback):
    resp = requests.post(f"{BACKEND_URL}/feedback/{alert_id}", json={"feedback": feedback}, timeout=10)
    print(f"✅ feedback alert={alert_id} → HTTP {resp.status_code}: {resp.json()}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate client alert traffic")
    parser.add_argument("--action", default="alert", choices=["panic", "alert", "feedback"])
    parser.add_argument("--url", default=BACKEND_URL)
    parser.add_argument("--user", type=int, default=1)
    parser.add_argument("--type", type=int, default=1)
    parser.add_argument("--message", default="Test alert")
    parser.add_argument("--lat", type=float, default=-12.0464)
    parser.add_argument("--lon", type=float, default=-77.0428)
    parser.add_argument("--photo", default=None, help="Path to a JPEG to attach")
    parser.add_argument("--alert-id", type=int, default=None)
    parser.add_argument("--feedback", default="Checked on site")
    args = parser.parse_args()

    BACKEND_URL = args.url.rstrip("/")
    if args.action == "panic":
        simulate_panic(args.user, args.lat, args.lon)
    elif args.action == "feedback":
        if args.alert_id is None:
            parser.error("--alert-id is required for feedback")
        simulate_feedback(args.alert_id, args.feedback)
    else:
        simulate_alert(args.user, args.type, args.message, args.lat, args.lon, args.photo)
