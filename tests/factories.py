from aure.auth import deps as auth_deps
from aure.main import app
from aure.models.models import Perfume


def as_user(user_id: str) -> None:
    app.dependency_overrides[auth_deps.get_current_user_id] = lambda: user_id


async def make_perfume(db, **kw) -> Perfume:
    data = dict(
        name="Santal 33",
        house="Le Labo",
        scent_family="woody",
        performance="balanced",
        notes={"top": ["cardamom"], "heart": ["sandalwood"], "base": ["leather"]},
        aura_words=["Grounded", "Confident", "Warm"],
        outfit_styles=["minimalist", "clean", "corporate"],
        occasions=["work", "casual", "date"],
        moods=["confident", "mysterious"],
        weather_performance={"ideal_temperature": ["mild", "cool"], "ideal_humidity": ["dry"]},
        image_url="https://img.example.com/santal.png",
    )
    data.update(kw)
    p = Perfume(**data)
    db.add(p)
    await db.commit()
    return p
