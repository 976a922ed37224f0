import json
from enum import Enum

import keyedcache
from keyedcache import Cache, JSONView, KeyedCache


class EnvironmentKey(Enum):
    APP_ID = "appID"


class UserKey(str, Enum):
    NAME = "name"
    ADDRESS = "address"


class AddressKey(str, Enum):
    CITY = "city"


def main() -> None:
    app_cache: KeyedCache[EnvironmentKey] = KeyedCache({EnvironmentKey.APP_ID: "APP-ID"})
    keyedcache.set("environment", app_cache)

    # Any module can reach the same store by name.
    shared = keyedcache.resolve("environment", KeyedCache)
    shared.set(EnvironmentKey.APP_ID, "prod-app")
    print("app id:", app_cache.resolve(EnvironmentKey.APP_ID, str))

    payload = json.dumps(
        [
            {"name": "Leanne Graham", "address": {"city": "Gwenborough"}, "phone": "1-770"},
            {"name": "Ervin Howell", "address": {"city": "Wisokyburgh"}},
        ]
    ).encode("utf-8")

    for user in JSONView.array_from(payload, UserKey):
        address = user.json(UserKey.ADDRESS, AddressKey)
        city = address.get(AddressKey.CITY, str) if address is not None else None
        print(user.resolve(UserKey.NAME, str), "->", city)

    scratch = Cache()
    scratch.update("runs", lambda n: (n or 0) + 1)
    print("runs:", scratch.resolve("runs", int))


if __name__ == "__main__":
    main()
