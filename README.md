# milighthub

Gateway logic for MiLight / LimitlessLED bulbs, in plain Python with no
third-party dependencies.

The package covers:

- **UDP protocol servers** that speak the v5 and v6 gateway protocols
  (`milighthub.v5_server.V5MiLightUdpServer`,
  `milighthub.v6_server.V6MiLightUdpServer`). `milighthub.udp_factory.server_from_version`
  picks the right one for a protocol version.
- **Discovery** (`milighthub.discovery_server.DiscoveryServer`). It answers the
  `Link_Wi-Fi` and `HF-A11ASSISTHREAD` search broadcasts.
- **v6 command handlers** for RGB+CCT, RGBW, RGB and CCT remotes
  (`milighthub.v6_handlers`).
- **Transitions** that fade a field or a colour over time
  (`milighthub.transition_controller.TransitionController`).
- **Types and helpers**: `BulbId`, `RemoteType`, `GroupStateField`, `ParsedColor`,
  `MiLightStatus`, RF24 channel and power level names, hex parsing and colour
  temperature units.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Driving the bulbs

The servers do not send radio packets themselves. They call methods on a
`milighthub.udp_server.MiLightClient`, so you supply the object that talks
to your radio:

```python
from milighthub.udp_server import MiLightClient
from milighthub.udp_factory import server_from_version

class MyClient(MiLightClient):
    ...  # implement update_status, update_brightness, etc.

server = server_from_version(6, MyClient(), 5987, 0x1234)
server.begin()
while True:
    server.handle_client()
```

## Transitions

```python
from milighthub.bulb_id import BulbId
from milighthub.remote_type import RemoteType
from milighthub.group_state_field import GroupStateField
from milighthub.transition_controller import TransitionController

controller = TransitionController()
controller.add_listener(lambda bulb, field, value: print(bulb, field, value))

bulb = BulbId(0x1234, 1, RemoteType.RGB_CCT)
builder = controller.build_field_transition(bulb, GroupStateField.LEVEL, 0, 100)
builder.set_duration(5)
controller.add_transition(builder.build())

controller.loop(now=1000)
```

`loop` takes the current time in milliseconds. Each transition sends at most
one step per period and drops out of the controller once it has finished.