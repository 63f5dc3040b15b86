import factory
from factory.alchemy import SQLAlchemyModelFactory

from db.models import Book, Rating, Review, User, UserBook


class _BaseFactory(SQLAlchemyModelFactory):

    class Meta:
        abstract = True
        sqlalchemy_session_persistence = "commit"


class UserFactory(_BaseFactory):
    """Factory for creating User instances."""

    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"reader{n}")
    email = factory.Sequence(lambda n: f"reader{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    bio = ""


class BookFactory(_BaseFactory):
    """Factory for creating catalog Book instances."""

    class Meta:
        model = Book

    title = factory.Sequence(lambda n: f"Book Title {n}")
    author = factory.Faker("name")
    isbn = factory.Sequence(lambda n: f"978000000{n:04d}")


class UserBookFactory(_BaseFactory):

    class Meta:
        model = UserBook

    user = factory.SubFactory(UserFactory)
    book = factory.SubFactory(BookFactory)
    shelf_name = "Read"


class ReviewFactory(_BaseFactory):

    class Meta:
        model = Review

    user = factory.SubFactory(UserFactory)
    book = factory.SubFactory(BookFactory)
    content = factory.Faker("sentence")


class RatingFactory(_BaseFactory):

    class Meta:
        model = Rating

    user = factory.SubFactory(UserFactory)
    book = factory.SubFactory(BookFactory)
    value = 4


ALL_FACTORIES = (UserFactory, BookFactory, UserBookFactory, ReviewFactory, RatingFactory)
