import os
import importlib.util

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
spec = importlib.util.spec_from_file_location(
    "main",
    os.path.join(os.path.dirname(__file__), os.pardir, "main.py"),
)
_mmodule = importlib.util.module_from_spec(spec)
spec.loader.exec_module(_mmodule)
main = _mmodule
pygame = main.pygame
Mood = main.Mood


def _post(event_type, **attrs):
    pygame.event.post(pygame.event.Event(event_type, attrs))


def _engine(tmp_path):
    # An empty asset dir exercises the placeholder frames.
    return main.GameEngine(asset_dir=str(tmp_path))


def test_missing_assets_fall_back_to_placeholders(tmp_path):
    eng = _engine(tmp_path)
    assert len(eng.frames[Mood.WANDER]) == main.WALK_FRAME_COUNT
    assert len(eng.frames[Mood.SLEEP]) == 1
    assert eng.ball.image is None
    assert eng.step() is True


def test_frames_are_loaded_in_order(tmp_path):
    pygame.init()
    folder = tmp_path / "sleep"
    folder.mkdir()
    for i, size in enumerate([(10, 20), (30, 40)], start=1):
        pygame.image.save(pygame.Surface(size), str(folder / f"SparkSleep{i:04d}.png"))
    font = pygame.font.Font(None, 20)
    frames = main.load_frames(str(tmp_path), "sleep", "SparkSleep", None, font, 500)
    assert [f.get_size() for f in frames] == [(10, 20), (30, 40)]
    big = main.load_frames(str(tmp_path), "sleep", "SparkSleep", None, font, 20)
    assert big[1].get_size() == (15, 20)


def test_click_on_pet_raises_frustration(tmp_path):
    eng = _engine(tmp_path)
    x, y = eng.pet.x, eng.pet.y
    _post(pygame.MOUSEBUTTONDOWN, pos=(int(x), int(y)), button=1)
    eng.step()
    assert eng.pet.get_frustration() == 10.0
    assert eng.pet.press.active


def test_ball_then_click_sends_pet(tmp_path):
    eng = _engine(tmp_path)
    _post(pygame.MOUSEBUTTONDOWN, pos=eng.ball.rect.center, button=1)
    _post(pygame.MOUSEBUTTONDOWN, pos=(600, 150), button=1)
    eng.step()
    assert eng.pet.is_following()
    assert eng.pet.get_frustration() == 0.0


def test_plate_feeds_pet(tmp_path):
    eng = _engine(tmp_path)
    _post(pygame.MOUSEBUTTONDOWN, pos=eng.plate.rect.center, button=1)
    _post(pygame.MOUSEMOTION, pos=(int(eng.pet.x), int(eng.pet.y)), rel=(0, 0), buttons=(1, 0, 0))
    _post(pygame.MOUSEBUTTONUP, pos=(int(eng.pet.x), int(eng.pet.y)), button=1)
    eng.step()
    assert eng.pet.get_mood() == Mood.HAPPY
    assert eng.pet.get_happiness() > 60


def test_keys_trigger_moods(tmp_path):
    eng = _engine(tmp_path)
    _post(pygame.KEYDOWN, key=pygame.K_c, mod=0, unicode="c", scancode=0)
    eng.step()
    assert eng.pet.get_mood() == Mood.CELEBRATE
    assert any("jumps for joy" in m for m in eng.messages)


def test_quit_stops_the_loop(tmp_path):
    eng = _engine(tmp_path)
    _post(pygame.QUIT)
    assert eng.step() is False


def test_sparkpet_command_points_at_main():
    root = os.path.join(os.path.dirname(__file__), os.pardir, os.pardir)
    with open(os.path.join(root, "pyproject.toml")) as f:
        assert 'sparkpet = "main:main"' in f.read()
    assert callable(main.main)
