"""Step templates used to generate a new roadmap for a learning category.

Each template is an ordered list of (title, description, resource_ids)
tuples.  Resource ids refer to the seeded catalog in resource_service.
"""

from __future__ import annotations

from uuid import uuid4

from learnroute.models.roadmap import RoadmapStep

DEFAULT_CATEGORY = "web-development"

StepTemplate = tuple[str, str, tuple[int, ...]]

# fmt: off
TEMPLATES: dict[str, tuple[StepTemplate, ...]] = {
    "web-development": (
        (
            "HTML & CSS Fundamentals",
            "Learn the basics of HTML5 and CSS3, the building blocks of web development.",
            (1, 2),
        ),
        (
            "JavaScript Essentials",
            "Master the core concepts of JavaScript programming language.",
            (2, 3),
        ),
        (
            "Frontend Frameworks",
            "Learn popular frontend frameworks like React, Angular, or Vue.",
            (4, 5),
        ),
        (
            "Backend Development",
            "Explore server-side programming with Node.js, Express, and databases.",
            (6, 7),
        ),
        (
            "Responsive Design & Accessibility",
            "Create websites that work well on all devices and are accessible to everyone.",
            (1, 3),
        ),
        (
            "API Development & Integration",
            "Learn to create and consume APIs for connecting services and data sources.",
            (5, 7),
        ),
        (
            "Deployment & DevOps",
            "Understand how to deploy websites and set up continuous integration.",
            (8, 7),
        ),
        (
            "Advanced Frontend Techniques",
            "Master advanced concepts like state management, performance optimization, and animations.",
            (4, 6),
        ),
    ),
    "data-science": (
        (
            "Python Basics",
            "Learn the fundamentals of Python programming language for data analysis.",
            (4, 8),
        ),
        (
            "Data Manipulation with Pandas",
            "Master data cleaning, transformation, and analysis with Pandas library.",
            (3, 5),
        ),
        (
            "Data Visualization",
            "Learn to create meaningful visualizations with Matplotlib, Seaborn, and Plotly.",
            (2, 6),
        ),
        (
            "SQL & Database Management",
            "Understand how to query and manage databases for data extraction.",
            (1, 7),
        ),
        (
            "Statistical Analysis",
            "Master statistical concepts and hypothesis testing for data interpretation.",
            (2, 4),
        ),
        (
            "Machine Learning Basics",
            "Explore fundamental machine learning algorithms and techniques.",
            (3, 8),
        ),
        (
            "Big Data Technologies",
            "Learn tools and frameworks for handling large datasets.",
            (1, 5),
        ),
        (
            "Data Science Projects",
            "Apply your skills to real-world data science projects and build a portfolio.",
            (6, 7),
        ),
    ),
    "machine-learning": (
        (
            "Mathematics for Machine Learning",
            "Build a strong foundation in linear algebra, calculus, and probability.",
            (1, 3),
        ),
        (
            "Python for Machine Learning",
            "Learn Python and essential libraries like NumPy and SciPy.",
            (2, 4),
        ),
        (
            "Supervised Learning Algorithms",
            "Master regression, classification, and ensemble techniques.",
            (5, 7),
        ),
        (
            "Unsupervised Learning",
            "Explore clustering, dimensionality reduction, and association analysis.",
            (6, 8),
        ),
        (
            "Neural Networks & Deep Learning",
            "Learn the fundamentals of neural networks and deep learning architectures.",
            (1, 5),
        ),
        (
            "Computer Vision",
            "Understand techniques for image recognition and processing.",
            (2, 6),
        ),
        (
            "Natural Language Processing",
            "Master techniques for working with text data and language models.",
            (3, 7),
        ),
        (
            "ML Operations & Deployment",
            "Learn how to deploy and maintain machine learning models in production.",
            (4, 8),
        ),
    ),
    "mobile-development": (
        (
            "Mobile Development Fundamentals",
            "Understand the basics of mobile app development and platforms.",
            (1, 2),
        ),
        (
            "Swift & iOS Development",
            "Learn Swift programming language and iOS app development.",
            (3, 4),
        ),
        (
            "Kotlin & Android Development",
            "Master Kotlin and Android Studio for building Android apps.",
            (5, 6),
        ),
        (
            "Cross-Platform Development with Flutter",
            "Learn to build apps for multiple platforms using Flutter and Dart.",
            (7, 8),
        ),
        (
            "Mobile UI/UX Design",
            "Master the principles of designing intuitive mobile interfaces.",
            (1, 5),
        ),
        (
            "Mobile Backend Services",
            "Understand how to integrate with backend services and APIs.",
            (2, 6),
        ),
        (
            "Local Data Storage",
            "Learn techniques for storing and managing data on mobile devices.",
            (3, 7),
        ),
        (
            "App Deployment & Publishing",
            "Learn how to prepare, test, and publish your app to app stores.",
            (4, 8),
        ),
    ),
    "blockchain": (
        (
            "Blockchain Fundamentals",
            "Understand the basic concepts and principles of blockchain technology.",
            (1, 2),
        ),
        (
            "Cryptography Basics",
            "Learn essential cryptographic concepts that power blockchain security.",
            (3, 4),
        ),
        (
            "Bitcoin Protocol",
            "Understand how Bitcoin works as the first blockchain implementation.",
            (5, 6),
        ),
        (
            "Ethereum & Smart Contracts",
            "Learn about Ethereum and how to write smart contracts with Solidity.",
            (7, 8),
        ),
        (
            "Decentralized Applications (DApps)",
            "Build applications that run on decentralized blockchain networks.",
            (1, 5),
        ),
        (
            "Web3 Development",
            "Learn to create web applications that interact with blockchain networks.",
            (2, 6),
        ),
        (
            "Tokenomics & NFTs",
            "Understand token economics, cryptocurrency, and non-fungible tokens.",
            (3, 7),
        ),
        (
            "Blockchain Security & Best Practices",
            "Master security considerations and best practices for blockchain development.",
            (4, 8),
        ),
    ),
    "cloud-computing": (
        (
            "Cloud Computing Fundamentals",
            "Understand the basics of cloud services, models, and providers.",
            (1, 2),
        ),
        (
            "AWS Essentials",
            "Learn the fundamental services and architecture of Amazon Web Services.",
            (3, 4),
        ),
        (
            "Microsoft Azure Basics",
            "Explore Microsoft's cloud platform and its core services.",
            (5, 6),
        ),
        (
            "Google Cloud Platform",
            "Learn about Google's cloud infrastructure and services.",
            (7, 8),
        ),
        (
            "Cloud Storage & Databases",
            "Master various storage solutions and database services in the cloud.",
            (1, 5),
        ),
        (
            "Serverless Computing",
            "Understand serverless architecture and Function as a Service (FaaS).",
            (2, 6),
        ),
        (
            "Cloud Security",
            "Learn security best practices and compliance in cloud environments.",
            (3, 7),
        ),
        (
            "Cloud Cost Optimization",
            "Master strategies for managing and optimizing cloud costs.",
            (4, 8),
        ),
    ),
    "devops": (
        (
            "DevOps Fundamentals",
            "Understand the DevOps culture, principles, and practices.",
            (1, 2),
        ),
        (
            "Linux & Scripting",
            "Learn Linux administration and shell scripting fundamentals.",
            (3, 4),
        ),
        (
            "Version Control with Git",
            "Master Git for source code management and collaboration.",
            (5, 6),
        ),
        (
            "Containerization with Docker",
            "Learn how to containerize applications using Docker.",
            (7, 8),
        ),
        (
            "Container Orchestration with Kubernetes",
            "Master deploying and managing containers at scale with Kubernetes.",
            (1, 5),
        ),
        (
            "CI/CD Pipelines",
            "Set up continuous integration and continuous deployment pipelines.",
            (2, 6),
        ),
        (
            "Infrastructure as Code",
            "Learn tools like Terraform and CloudFormation for infrastructure automation.",
            (3, 7),
        ),
        (
            "Monitoring & Observability",
            "Implement systems for monitoring, logging, and observability.",
            (4, 8),
        ),
    ),
}
# fmt: on

CATEGORIES: tuple[str, ...] = tuple(TEMPLATES)


def resolve_category(category: str) -> str:
    """Return ``category`` if a template exists for it, else the default."""
    return category if category in TEMPLATES else DEFAULT_CATEGORY


def generate_steps(category: str) -> tuple[RoadmapStep, ...]:
    """Fresh, incomplete steps for ``category``.

    Every call mints new step ids so two roadmaps never share one.
    """
    return tuple(
        RoadmapStep(
            id=str(uuid4()),
            title=title,
            description=description,
            resource_ids=resource_ids,
            completed=False,
        )
        for title, description, resource_ids in TEMPLATES[resolve_category(category)]
    )
