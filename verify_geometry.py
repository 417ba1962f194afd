from slidesnap.config import PRESETS, get_preset
from slidesnap.generator import generate_connector


def check_geometry():
    for name in PRESETS:
        params = get_preset(name)
        print(f"Generating '{name}' connector...")
        result = generate_connector(params, name=name)
        print(f"  clip height   = {params.clip_height:.4f}")
        print(f"  channel width = {params.channel_width:.4f}")
        print(f"  female length = {params.female_length:.4f}")

        if not result.ok:
            print(f"FAIL: {result.error_message}")
            continue

        bb = result.female_negative.bounding_box()
        print(f"  negative bbox = {bb.size.X:.4f} x {bb.size.Y:.4f} x {bb.size.Z:.4f}")
        print(f"PASS: {result.status.value} ({result.generation_time_ms:.1f}ms)")


if __name__ == "__main__":
    check_geometry()
