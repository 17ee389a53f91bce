# Static resume data served by GET /api/portfolio

PORTFOLIO_DATA = {
    "personalInfo": {
        "name": "Chala Birmechu",
        "title": "Full Stack & Mobile Developer",
        "location": "Addis Ababa, Ethiopia",
        "email": "chalabirmechu@gmail.com",
        "phone": ["+251915950217", "+251941274261"],
        "bio": (
            "I am a passionate software engineer specializing in full-stack web development "
            "and mobile application development. With hands-on experience in both frontend & "
            "backend technologies as well as native and cross-platform mobile apps, I bring "
            "ideas to life through clean code and scalable architecture."
        ),
        "experience": "2+",
        "projects": "5+",
        "clients": "3+",
        "satisfaction": "100%",
    },
    "skills": {
        "frontend": ["React", "Vue", "HTML5", "CSS3", "JavaScript", "TailwindCSS"],
        "backend": ["Node.js", "Express", "Django", "Spring Boot", "Flask"],
        "mobile": ["Flutter", "React Native", "Android", "iOS"],
        "devops": ["Git", "Docker", "AWS", "Heroku", "CI/CD"],
    },
    "projects": [
        {
            "title": "Portfolio Website",
            "description": "Personal portfolio with a contact form that stores messages and sends email notifications.",
            "technologies": ["React", "TailwindCSS", "FastAPI"],
        },
    ],
}
