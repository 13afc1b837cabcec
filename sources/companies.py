"""
Static company tables used when no live provider answers
"""
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class CompanyProfile:
    name: str
    careers_url: Optional[str] = None
    description: Optional[str] = None
    display_name: Optional[str] = None
    website_url: Optional[str] = None
    logo: Optional[str] = None
    location: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


def _c(name, url, description=None, display_name=None, website_url=None):
    return CompanyProfile(name=name, careers_url=url, description=description,
                          display_name=display_name, website_url=website_url)


# Companies with a known presence in a city, keyed by location keyword.
# The first key found in the location wins.
LOCATION_COMPANIES: Dict[str, List[CompanyProfile]] = {
    "mysore": [
        _c("Infosys", "https://www.infosys.com/careers", "Global IT services company with major presence in Mysore"),
        _c("Wipro", "https://careers.wipro.com", "Leading IT services company with development center in Mysore"),
        _c("TCS", "https://www.tcs.com/careers", "Tata Consultancy Services - IT services and consulting"),
        _c("Tech Mahindra", "https://careers.techmahindra.com", "Digital transformation and IT services"),
        _c("HCL Technologies", "https://www.hcltech.com/careers", "IT services and product engineering"),
        _c("L&T Infotech", "https://www.lntinfotech.com/careers", "Digital solutions and IT services"),
        _c("Mindtree", "https://www.mindtree.com/careers", "Digital transformation and technology services"),
        _c("Mphasis", "https://www.mphasis.com/careers", "IT solutions and services"),
    ],
    "bangalore": [
        _c("Infosys", "https://www.infosys.com/careers"),
        _c("Wipro", "https://careers.wipro.com"),
        _c("TCS", "https://www.tcs.com/careers"),
        _c("Flipkart", "https://www.flipkartcareers.com"),
        _c("Ola", "https://www.olacabs.com/careers"),
        _c("Swiggy", "https://careers.swiggy.com"),
        _c("Razorpay", "https://razorpay.com/jobs"),
        _c("Zoho", "https://www.zoho.com/careers"),
        _c("Freshworks", "https://www.freshworks.com/careers"),
        _c("PhonePe", "https://www.phonepe.com/careers"),
    ],
    "mumbai": [
        _c("TCS", "https://www.tcs.com/careers"),
        _c("Tech Mahindra", "https://careers.techmahindra.com"),
        _c("Capgemini", "https://www.capgemini.com/careers"),
        _c("Accenture", "https://www.accenture.com/careers"),
        _c("Cognizant", "https://careers.cognizant.com"),
        _c("JP Morgan", "https://careers.jpmorgan.com"),
        _c("Goldman Sachs", "https://www.goldmansachs.com/careers"),
    ],
    "hyderabad": [
        _c("Microsoft", "https://careers.microsoft.com"),
        _c("Amazon", "https://amazon.jobs"),
        _c("Google", "https://careers.google.com"),
        _c("Oracle", "https://www.oracle.com/careers"),
        _c("Dell", "https://jobs.dell.com"),
        _c("Tech Mahindra", "https://careers.techmahindra.com"),
        _c("Infosys", "https://www.infosys.com/careers"),
    ],
    "chennai": [
        _c("TCS", "https://www.tcs.com/careers"),
        _c("Infosys", "https://www.infosys.com/careers"),
        _c("Cognizant", "https://careers.cognizant.com"),
        _c("HCL Technologies", "https://www.hcltech.com/careers"),
        _c("Zoho", "https://www.zoho.com/careers"),
        _c("Ford", "https://corporate.ford.com/careers.html"),
    ],
    "pune": [
        _c("Infosys", "https://www.infosys.com/careers"),
        _c("Tech Mahindra", "https://careers.techmahindra.com"),
        _c("Persistent Systems", "https://www.persistent.com/careers"),
        _c("Amdocs", "https://www.amdocs.com/careers"),
        _c("Barclays", "https://www.barclays.com/careers"),
    ],
    "delhi": [
        _c("HCL Technologies", "https://www.hcltech.com/careers"),
        _c("Adobe", "https://www.adobe.com/careers"),
        _c("Paytm", "https://paytm.com/careers"),
        _c("MakeMyTrip", "https://careers.makemytrip.com"),
        _c("Nagarro", "https://www.nagarro.com/careers"),
    ],
}

INDIA_REGION_KEYWORDS = [
    "karnataka", "india", "bangalore", "mumbai", "delhi",
    "hyderabad", "chennai", "pune", "mysore",
]

INDIA_COMPANIES = [
    _c("Infosys", "https://www.infosys.com/careers"),
    _c("TCS", "https://www.tcs.com/careers"),
    _c("Wipro", "https://careers.wipro.com"),
    _c("Tech Mahindra", "https://careers.techmahindra.com"),
    _c("HCL Technologies", "https://www.hcltech.com/careers"),
    _c("Zoho", "https://www.zoho.com/careers"),
    _c("Freshworks", "https://www.freshworks.com/careers"),
    _c("Razorpay", "https://razorpay.com/jobs"),
    _c("Flipkart", "https://www.flipkartcareers.com"),
    _c("Ola", "https://www.olacabs.com/careers"),
]

GLOBAL_COMPANIES = [
    _c("Google", "https://careers.google.com"),
    _c("Microsoft", "https://careers.microsoft.com"),
    _c("Amazon", "https://amazon.jobs"),
    _c("Meta", "https://careers.meta.com"),
    _c("Netflix", "https://jobs.netflix.com"),
    _c("Tesla", "https://tesla.com/careers"),
    _c("Spotify", "https://lifeatspotify.com"),
]

# Employers added to live GitHub results because GitHub rarely lists them by city
KNOWN_COMPANIES: Dict[tuple, List[CompanyProfile]] = {
    ("mysore", "karnataka"): [
        _c("Infosys", "https://www.infosys.com/careers", "Global IT services company with major presence in Mysore",
           website_url="https://www.infosys.com"),
        _c("Wipro", "https://careers.wipro.com", "Leading IT services company with development center in Mysore",
           website_url="https://www.wipro.com"),
        _c("TCS", "https://www.tcs.com/careers", "IT services and consulting",
           display_name="Tata Consultancy Services", website_url="https://www.tcs.com"),
        _c("Tech Mahindra", "https://careers.techmahindra.com", "Digital transformation and IT services",
           website_url="https://www.techmahindra.com"),
        _c("HCL Technologies", "https://www.hcltech.com/careers", "IT services and product engineering",
           website_url="https://www.hcltech.com"),
        _c("L&T Infotech", "https://www.lntinfotech.com/careers", "Digital solutions and IT services",
           website_url="https://www.lntinfotech.com"),
        _c("Mindtree", "https://www.mindtree.com/careers", "Digital transformation and technology services",
           website_url="https://www.mindtree.com"),
        _c("Mphasis", "https://www.mphasis.com/careers", "IT solutions and services",
           website_url="https://www.mphasis.com"),
    ],
    ("bangalore", "bengaluru"): [
        _c("Flipkart", "https://www.flipkartcareers.com", website_url="https://www.flipkart.com"),
        _c("Ola", "https://www.olacabs.com/careers", website_url="https://www.olacabs.com"),
        _c("Swiggy", "https://careers.swiggy.com", website_url="https://www.swiggy.com"),
        _c("Razorpay", "https://razorpay.com/jobs", website_url="https://razorpay.com"),
    ],
}

GENERATED_JOB_TITLES = [
    "Software Engineer", "Frontend Developer", "Backend Developer",
    "Full Stack Developer", "DevOps Engineer", "Data Scientist",
    "Product Manager", "UI/UX Designer", "Mobile Developer",
]

GITHUB_JOB_TITLES = GENERATED_JOB_TITLES + [
    "Python Developer", "Java Developer", "React Developer",
]

STANDARD_QUALIFICATIONS = [
    "Bachelor's degree in Computer Science or related field",
    "Strong problem-solving skills",
    "Excellent communication abilities",
]

STANDARD_BENEFITS = [
    "Competitive salary and equity",
    "Health, dental, and vision insurance",
    "Flexible work arrangements",
    "Professional development budget",
]

EXTENDED_BENEFITS = STANDARD_BENEFITS + [
    "Unlimited PTO",
    "Free meals and snacks",
]


def companies_for_location(location: str) -> List[CompanyProfile]:
    """
    Pick the company table for a location

    A city match wins, then any Indian region keyword, then the global list.
    """
    location_lower = (location or "").lower().strip()
    for city, companies in LOCATION_COMPANIES.items():
        if city in location_lower:
            return companies
    if any(keyword in location_lower for keyword in INDIA_REGION_KEYWORDS):
        return INDIA_COMPANIES
    return GLOBAL_COMPANIES


def known_companies_for_location(location: str) -> List[CompanyProfile]:
    location_lower = (location or "").lower()
    companies: List[CompanyProfile] = []
    for keywords, profiles in KNOWN_COMPANIES.items():
        if any(keyword in location_lower for keyword in keywords):
            companies.extend(profiles)
    return companies
