"""Create demo volumes for development/testing."""

import shutil

from nova_archives import storage

PROLOGUE_ZH = """\
零点：信号正常。

芷漓（低声）：“你听到了吗？”

雨一直在下，
城市的灯光一盏一盏熄灭。

泽洛（通信频道）：[[GREEN::频道已接通]]，保持静默。

0000.2Void>>检测到异常信号
>> 这不是你应该看到的东西。
【插入结束】

[[DIVIDER]]
白栖：我记得这里。[[VOID_VISION::她曾在这里等过一个不会回来的人。]]然后呢？
[[IMAGE::img/rain-street.png::雨夜的街道]]
[[JUMP::vol-pb::前往另一侧]]
"""

PROLOGUE_EN = """\
Point: Signal is clear.

Zeri(whispering): "Did you hear that?"

The rain kept falling,
and the city lights went out one by one.

Zelo(Comms Channel): [[GREEN::Channel open]], stay silent.

0600.0Void>>Anomalous signal detected
>> This is not something you should see.
[INSERTION_END]

[[DIVIDER]]
Byaki: I remember this place. **Nothing** has changed.
[[JUMP::vol-pb::Cross over]]
"""

DEMO_VOLUMES = [
    {
        "id": "vol-main",
        "title": "Nova Archives",
        "chapters": [
            {
                "id": "story-rematerialization",
                "status": "published",
                "translations": {
                    "zh-CN": {"title": "再物质化", "content": PROLOGUE_ZH},
                    "en": {"title": "Rematerialization", "content": PROLOGUE_EN},
                },
            },
            {
                "id": "story-frag-rain-01",
                "status": "published",
                "translations": {
                    "zh-CN": {"title": "雨的碎片", "content": "雨停了。\n???>> 还没有结束。\n"},
                },
            },
            {
                "id": "story-sealed",
                "status": "locked",
                "translations": {"zh-CN": {"title": "封存", "content": ""}},
            },
            {
                "id": "story-frag-rain-02",
                "status": "constructing",
                "translations": {"zh-CN": {"title": "未完成", "content": ""}},
            },
        ],
    },
    {
        "id": "vol-pb",
        "title": "Point Break",
        "requires_read": "story-rematerialization",
        "chapters": [
            {
                "id": "PB-01",
                "status": "published",
                "translations": {
                    "zh-CN": {"title": "黑白", "content": "零点：这里没有颜色。\n芷漓：那就不要颜色。\n"},
                },
            },
        ],
    },
]


def create_demo_data() -> None:
    """Wipe existing volumes and create fresh demo data."""
    if storage.volumes_dir().exists():
        shutil.rmtree(storage.volumes_dir())
    storage.volumes_dir().mkdir(parents=True, exist_ok=True)

    for volume in DEMO_VOLUMES:
        storage.save_volume(volume)
