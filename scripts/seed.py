"""Populate the blog database with sample users, articles and comments."""
import argparse
import asyncio
import random
import time
from datetime import datetime, timedelta, timezone

from app.database import engine, async_session, Base
from app.models import User, Article, Comment

TOPICS = ["python", "postgresql", "testing", "deployment", "api design", "sql"]


async def seed(num_users: int, num_articles: int, comments_per_article: int, reset: bool, rng_seed: int):
    rng = random.Random(rng_seed)
    print(f"Seeding: {num_users} users, {num_articles} articles, "
          f"up to {num_articles * comments_per_article} comments")
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users = []
        for i in range(num_users):
            user = User(
                name=f"User {i}",
                writer=i % 2 == 0,
                admin=i == 0,
                password=f"password-{i}",
            )
            session.add(user)
            users.append(user)
        await session.flush()
        print(f"  Created {len(users)} users")

        writers = [u for u in users if u.writer] or users
        now = datetime.now(timezone.utc)
        articles = []
        for i in range(num_articles):
            topic = rng.choice(TOPICS)
            article = Article(
                title=f"Article {i}: notes on {topic}",
                content=f"Some thoughts about {topic}. " * 10,
                modified=now - timedelta(days=rng.randint(0, 365)),
                authorid=rng.choice(writers).id,
            )
            session.add(article)
            articles.append(article)
        await session.flush()
        print(f"  Created {len(articles)} articles")

        total_comments = 0
        for article in articles:
            for _ in range(rng.randint(0, comments_per_article)):
                commentor = rng.choice(users)
                session.add(Comment(
                    content=f"{commentor.name} enjoyed this one.",
                    articleid=article.id,
                    commentorid=commentor.id,
                ))
                total_comments += 1
        await session.flush()
        print(f"  Created {total_comments} comments")

        await session.commit()

    await engine.dispose()
    print(f"\nSeeding complete in {time.perf_counter() - start:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--users", type=int, default=5)
    parser.add_argument("--articles", type=int, default=10)
    parser.add_argument("--comments", type=int, default=3, help="Maximum comments per article")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args()
    asyncio.run(seed(args.users, args.articles, args.comments, args.reset, args.seed))


if __name__ == "__main__":
    main()
