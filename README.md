# zbplug

Plugin logic for a group-chat bot, kept apart from any chat transport. You call
it from whatever bot framework you use, and each part can be tested on its own.

## Installation

```
pip install .
```

For the test suite, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `zbplug.emojimix` | Recognises two emoji, or QQ faces that stand for them (`match_emojis`, `face_to_emoji`, `Segment`). Builds the two candidate Emoji Kitchen image URLs (`mix_urls`) and returns the first one that answers 200 OK (`find_mix`). |
| `zbplug.heisi` | Decodes 10-byte packed picture records into URLs (`Item`, `decode_items`). `Gallery` keeps one list per command and picks a random picture. |
| `zbplug.flags` | Immutable bit-flag settings. `RequestPolicy` holds the auto-accept switches; `PoolMode` selects the five-star card pool. |
| `zbplug.funny` | Reads jokes from an SQLite `jokes` table (`JokeBook`). `tell_joke` fills in the `%name` placeholder. |
| `zbplug.epidemic` | Parses a report into an `Area` tree (`parse_report`), finds a city in it (`find_city`), and formats the figures (`format_report`). `query_epidemic` fetches the report and looks up the city. |
| `zbplug.github` | Repository search: the query URL (`search_url`), a GET that raises `HttpStatusError` on any non-200 answer (`net_get`), and the reply text and/or preview image (`build_reply`). |
| `zbplug.fortune` | Daily fortune slips: choosing the background kind (`kind_index`, `kind_for`), picking a background from a zip (`pick_background`), laying text out in columns (`text_positions`), and drawing with Pillow (`draw`). |
| `zbplug.hs` | Hearthstone card search and deck images (`HearthstoneClient`), plus the helpers for its URLs and its answers. |
| `zbplug.event` | Friend requests and group invites: the notices for them (`format_invite`, `format_friend`) and the auto-accept rule (`should_auto_accept`). Also parses the answer and toggle commands (`parse_decision`, `parse_toggle`, `apply_toggle`). |
| `zbplug.genshin` | Ten-pull card draws from a zip of pictures (`CardPool`, `draw_cards`, `Draw`), with the reply text (`reply_text`) and a 1920x1080 result picture (`render`). |
| `zbplug.musiclib` | The local song library for the guessing game. It covers the JSON config (`Config`), playlist folders (`list_playlists`), random picks (`music_lottery`, `local_music`), file-name parsing (`parse_music_name`), and three 10-second clips cut with ffmpeg (`cut_music`). |
| `zbplug.guessgame` | One guessing round as a state machine (`GuessGame`, `Reply`, `Outcome`) and the choice of playlist (`choose_playlist`). |

## Example

```python
from zbplug.emojimix import match_emojis, mix_urls

pair = match_emojis([], "😀😍")
if pair is not None:
    first, second = pair
    print(mix_urls(first, second))
```

Several functions accept the network call as an argument: `fetch` in
`zbplug.epidemic`, `zbplug.hs` and `zbplug.musiclib.draw_by_ovooa`, `head` in
`zbplug.emojimix.find_mix`, and `downloader` in `zbplug.musiclib.music_lottery`.
Pass your own callable to use a different HTTP client or canned data. If you
leave it out, the standard library's `urllib` is used. `zbplug.github.net_get`
always uses `urllib`.

`zbplug.musiclib.cut_music` runs `ffmpeg`, which must be on `PATH`.

## What this package does not do

- It has no bot, command line or chat connection. It does not receive
  messages or send replies; your bot framework does that and calls these
  functions.
- It does not store per-group settings. `RequestPolicy` and `PoolMode` are
  plain values that you load and save yourself.
- It does not download songs or lyrics. `music_lottery` only fetches a song
  online through the `downloader` you pass in.
- It ships no data files. You supply the fortune backgrounds, the font, the
  card-draw zip, the joke database and the picture records yourself.