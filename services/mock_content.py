# services/mock_content.py
"""
Sample content used when upstream providers are unavailable.

MockNewsProvider is the fallback strategy injected into NewsService. The SEED_*
lists are what background ingestion writes to the database when it has no
NewsAPI key.
"""
import time
from datetime import datetime, timezone
from typing import Callable, List

from state.state_schema import ExternalArticle
from utils.sanitization import slugify

MOCK_CATEGORIES = [
    "technology", "environment", "business", "science",
    "health", "politics", "sports", "entertainment",
]

MOCK_TITLES = [
    "The Future of Quantum Computing: Beyond Qubits",
    "Global Markets React to New Trade Policies",
    "Breakthrough in Renewable Energy Storage",
    "Mars Colonization: A Timeline for 2030",
    "New Artificial Intelligence Regulations Proposed",
    "Championship Finals: Underdog Team Takes the Trophy",
    "Hollywood's Shift to Streaming-First Releases",
    "Urban Planning: The Rise of Smart Cities",
    "Genetic Editing: Ethical Implications Discussed",
    "Electric Aviation: The Next Frontier in Travel",
    "Cryptocurrency Regulations Tighten Globally",
    "Ocean Cleanup Project Reaches Major Milestone",
    "Virtual Reality in Education: A New Era",
    "Sustainable Fashion: Trends for 2026",
    "Robotics in Healthcare: Assisting Surgeons",
    "The Return of Vinyl: Music Industry Trends",
    "Space Tourism: Who Can Afford the Ticket?",
    "Cybersecurity Threats in the Age of IoT",
    "Mental Health Awareness in the Workplace",
    "The Gig Economy: Rights and Regulations",
]

MOCK_IMAGES = [
    "https://images.unsplash.com/photo-1677442136019-21780ecad995?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1611974765270-ca12586343bb?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1569163139599-0f4517e36b51?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1516849841032-87cbac4d88f7?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1576091160399-112ba8d25d1d?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1529101091760-61df6be5d187?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1461896836934-ffe607ba8211?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1499364615650-ec3872094569?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1451187580459-43490279c0fa?auto=format&fit=crop&q=80&w=1000",
    "https://images.unsplash.com/photo-1518770660439-4636190af475?auto=format&fit=crop&q=80&w=1000",
]

MOCK_AUTHOR = "ReadStream Editorial"
HOUR = 3600


class MockNewsProvider:
    """Deterministic sample batch per category, timestamped from the injected clock."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    def articles_for(self, category: str) -> List[ExternalArticle]:
        now = self.clock()
        articles = []
        for index, title in enumerate(MOCK_TITLES):
            cat = MOCK_CATEGORIES[index % len(MOCK_CATEGORIES)]
            description = (
                f"This is a comprehensive report on {title.lower()}. Experts analyze the impact, "
                f"trends, and future predictions regarding this significant development in the field "
                f"of {cat}. The world watches as changes unfold continuously."
            )
            published = datetime.fromtimestamp(now - index * HOUR, tz=timezone.utc)
            articles.append(ExternalArticle(
                title=title,
                description=description,
                body=" ".join([description] * 3),
                image_url=MOCK_IMAGES[index % len(MOCK_IMAGES)],
                published_at=published.isoformat(),
                author=MOCK_AUTHOR,
                source_name=MOCK_AUTHOR,
                # unique url per title so ids are unique
                url=f"/mock/{slugify(title)}",
                category=cat,
            ))

        # Soft filter: an unknown category still gets the full batch
        if category and category not in ("general", "all"):
            strict = [a for a in articles if a["category"] == category]
            if strict:
                return strict
        return articles


SEED_HEADLINES = [
    {
        "title": "Breaking: Major Tech Company Announces New AI Innovation",
        "author": "John Smith",
        "source": "Tech News Daily",
        "url": "https://example.com/article1",
        "description": "A leading technology company has unveiled groundbreaking artificial intelligence technology that promises to revolutionize the industry.",
        "category": "technology",
        "hours_ago": 0,
        "external_id": "mock_news_1",
    },
    {
        "title": "Global Climate Summit Reaches Historic Agreement",
        "author": "Sarah Johnson",
        "source": "World News Network",
        "url": "https://example.com/article2",
        "description": "World leaders have come together to sign a landmark climate agreement aimed at reducing carbon emissions by 50% over the next decade.",
        "category": "environment",
        "hours_ago": 1,
        "external_id": "mock_news_2",
    },
    {
        "title": "Stock Markets Hit Record Highs Amid Economic Recovery",
        "author": "Michael Chen",
        "source": "Financial Times",
        "url": "https://example.com/article3",
        "description": "Major stock indices reached all-time highs today as investors show confidence in the ongoing economic recovery.",
        "category": "business",
        "hours_ago": 2,
        "external_id": "mock_news_3",
    },
    {
        "title": "New Medical Breakthrough Offers Hope for Cancer Treatment",
        "author": "Dr. Emily Rodriguez",
        "source": "Medical Journal",
        "url": "https://example.com/article4",
        "description": "Researchers have discovered a promising new treatment method that shows remarkable results in early clinical trials.",
        "category": "health",
        "hours_ago": 3,
        "external_id": "mock_news_4",
    },
    {
        "title": "Space Agency Announces Plans for Mars Mission",
        "author": "David Park",
        "source": "Space News",
        "url": "https://example.com/article5",
        "description": "A major space agency has revealed ambitious plans for a manned mission to Mars within the next five years.",
        "category": "science",
        "hours_ago": 4,
        "external_id": "mock_news_5",
    },
    {
        "title": "Revolutionary Electric Vehicle Breaks Range Records",
        "author": "Lisa Anderson",
        "source": "Auto News",
        "url": "https://example.com/article6",
        "description": "A new electric vehicle model has shattered previous range records, traveling over 600 miles on a single charge.",
        "category": "technology",
        "hours_ago": 5,
        "external_id": "mock_news_6",
    },
    {
        "title": "Major Sports Championship Delivers Thrilling Finale",
        "author": "Tom Williams",
        "source": "Sports Daily",
        "url": "https://example.com/article7",
        "description": "The championship game ended in dramatic fashion with a last-second victory that will be remembered for years.",
        "category": "sports",
        "hours_ago": 6,
        "external_id": "mock_news_7",
    },
    {
        "title": "Education Reform Bill Passes with Bipartisan Support",
        "author": "Jennifer Lee",
        "source": "Political Review",
        "url": "https://example.com/article8",
        "description": "A comprehensive education reform bill has been passed with overwhelming support from both parties.",
        "category": "politics",
        "hours_ago": 7,
        "external_id": "mock_news_8",
    },
]

SEED_JOURNALS = [
    {
        "title": "Advances in Deep Learning for Natural Language Processing",
        "author": "Dr. Alan Turing et al.",
        "source": "arXiv",
        "url": "https://arxiv.org/abs/example1",
        "description": "This paper presents novel approaches to natural language understanding using transformer architectures.",
        "category": "Computer Science",
        "hours_ago": 24,
        "external_id": "arxiv_1",
    },
    {
        "title": "Quantum Computing Applications in Cryptography",
        "author": "Dr. Marie Curie et al.",
        "source": "arXiv",
        "url": "https://arxiv.org/abs/example2",
        "description": "An exploration of quantum algorithms and their implications for modern cryptographic systems.",
        "category": "Physics",
        "hours_ago": 48,
        "external_id": "arxiv_2",
    },
    {
        "title": "Machine Learning in Medical Diagnosis",
        "author": "Dr. Florence Nightingale et al.",
        "source": "arXiv",
        "url": "https://arxiv.org/abs/example3",
        "description": "A comprehensive study on applying machine learning techniques to improve medical diagnostic accuracy.",
        "category": "Medicine",
        "hours_ago": 72,
        "external_id": "arxiv_3",
    },
]

SEED_BOOKS = [
    {
        "title": "The Art of Computer Programming",
        "author": "Donald Knuth",
        "source": "Google Books",
        "url": "https://books.google.com/example1",
        "image_url": "https://via.placeholder.com/300x400/667eea/ffffff?text=Programming",
        "description": "A comprehensive monograph written by Donald Knuth that covers many kinds of programming algorithms.",
        "category": "Computer Science",
        "published_at": "1968-01-01",
        "external_id": "book_1",
    },
    {
        "title": "Sapiens: A Brief History of Humankind",
        "author": "Yuval Noah Harari",
        "source": "Google Books",
        "url": "https://books.google.com/example2",
        "image_url": "https://via.placeholder.com/300x400/10b981/ffffff?text=History",
        "description": "A narrative history of humanity from the Stone Age to the modern age.",
        "category": "History",
        "published_at": "2011-01-01",
        "external_id": "book_2",
    },
    {
        "title": "Thinking, Fast and Slow",
        "author": "Daniel Kahneman",
        "source": "Google Books",
        "url": "https://books.google.com/example3",
        "image_url": "https://via.placeholder.com/300x400/f59e0b/ffffff?text=Psychology",
        "description": "A groundbreaking tour of the mind explaining the two systems that drive the way we think.",
        "category": "Psychology",
        "published_at": "2011-10-25",
        "external_id": "book_3",
    },
]
