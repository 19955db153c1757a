#!/usr/bin/env python3
"""Feature Flags: Named Toggles Backed by Plain Callables.

================================================================================
WHY FEATURE FLAGS?
================================================================================

Feature flags decouple **deployment** from **release**::

    # Without flags: deploy = release (risky)
    def show_profile(user):
        return render_new_profile(user)

    # With flags: deploy safely, enable for a few users first
    def show_profile(user):
        if FEATURES.is_active("new_user_profile", user.id):
            return render_new_profile(user)
        return render_profile(user)


================================================================================
BEST PRACTICES
================================================================================

1. **Define every flag in one place at startup**::

       FEATURES = FlagRegistry(env=settings.env, setup=define_flags)

2. **Use scoped overrides in tests**::

       with FEATURES.override_with("new_user_profile", True):
           assert client.get("/profile").template == "new_user_profile"
       # Automatically reverts after block

3. **Clean up old flags**: remove flags that are permanently enabled


Run this example:
    python examples/feature_flags.py
"""

from simple_flag import FlagArgumentsMismatch, FlagRegistry

BETA_USERS = {7, 42}


def define_flags(feature: FlagRegistry) -> None:
    feature.define("new_user_profile", lambda user_id: user_id in BETA_USERS)
    feature.define("third_party_analytics", lambda: not feature.env_matches("production"))
    feature.define("search_backend", lambda: "opensearch" if feature.env_matches("staging") else "sqlite")


def main():
    print("=" * 60)
    print("Feature Flag Examples")
    print("=" * 60)

    features = FlagRegistry(env="staging", setup=define_flags)

    # === 1. Evaluating flags ===
    print("\n[1] Evaluating Flags")

    print(f"  new_user_profile(42): {features.is_active('new_user_profile', 42)}")
    print(f"  new_user_profile(1):  {features.is_active('new_user_profile', 1)}")
    print(f"  third_party_analytics: {features.is_active('third_party_analytics')}")
    print(f"  search_backend: {features.is_active('search_backend')} (raw result)")
    print(f"  undefined flag: {features.is_active('does_not_exist')}")

    # === 2. Argument checking ===
    print("\n[2] Argument Count Checking")

    try:
        features.is_active("new_user_profile")
    except FlagArgumentsMismatch as e:
        print(f"  {e}")

    # === 3. Overrides ===
    print("\n[3] Overrides")

    features.override("new_user_profile", True)
    print(f"  After override:  new_user_profile(1) = {features.is_active('new_user_profile', 1)}")
    features.reset_override("new_user_profile")
    print(f"  After reset:     new_user_profile(1) = {features.is_active('new_user_profile', 1)}")

    # === 4. Scoped override ===
    print("\n[4] Temporary Override via Context Manager")

    with features.override_with("third_party_analytics", False):
        print(f"  Inside context:  third_party_analytics = {features.is_active('third_party_analytics')}")
    print(f"  After context:   third_party_analytics = {features.is_active('third_party_analytics')}")

    # === 5. Feature-gated functions ===
    print("\n[5] Gate Decorator")

    @features.gate("new_user_profile", 42, fallback="old profile")
    def profile_page():
        return "new profile"

    print(f"  profile_page() = {profile_page()}")

    # === 6. Listing flags ===
    print("\n[6] Defined Flags")
    for name in features.list_flags():
        print(f"  {name}")

    print("\n" + "=" * 60)
    print("All feature flag examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
